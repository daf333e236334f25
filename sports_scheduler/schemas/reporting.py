"""Reporting Schemas — dashboards, browse pages and reports."""

from datetime import date

from pydantic import BaseModel

from sports_scheduler.schemas.session import SessionResponse
from sports_scheduler.schemas.sport import SportResponse


class DashboardResponse(BaseModel):
    upcoming_created: list[SessionResponse]
    past_created: list[SessionResponse]
    upcoming_joined: list[SessionResponse]
    past_joined: list[SessionResponse]
    available: list[SessionResponse]

    @classmethod
    def from_dashboard(cls, dashboard: dict) -> "DashboardResponse":
        return cls(**{
            key: [SessionResponse.from_session(s) for s in sessions]
            for key, sessions in dashboard.items()
        })


class BrowseEntry(BaseModel):
    session: SessionResponse
    has_joined: bool


class Pagination(BaseModel):
    current_page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class BrowseResponse(BaseModel):
    sessions: list[BrowseEntry]
    pagination: Pagination


class SportPopularity(BaseModel):
    sport_id: int
    name: str
    session_count: int
    total_players: int


class ReportStats(BaseModel):
    total_sessions: int
    active_sessions: int
    cancelled_sessions: int
    total_unique_players: int


class ReportResponse(BaseModel):
    start_date: date
    end_date: date
    sessions: list[SessionResponse]
    sport_popularity: list[SportPopularity]
    stats: ReportStats


class AdminSportEntry(BaseModel):
    sport: SportResponse
    session_count: int


class AdminStats(BaseModel):
    total_sports: int
    total_players: int
    total_sessions: int


class AdminDashboardResponse(BaseModel):
    sports: list[AdminSportEntry]
    upcoming_sessions: list[SessionResponse]
    stats: AdminStats
