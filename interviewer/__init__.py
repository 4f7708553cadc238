"""Interviewer generators: reply schemas, prompts and registry-backed calls."""
from .agents import generate_interview_opening, generate_interview_summary, generate_interview_turn
from .schemas import InterviewSummaryReply, OpeningReply, TurnReply

__all__ = [
    "InterviewSummaryReply",
    "OpeningReply",
    "TurnReply",
    "generate_interview_opening",
    "generate_interview_summary",
    "generate_interview_turn",
]
