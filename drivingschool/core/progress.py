"""Indicateurs de progression affichés aux élèves et aux moniteurs."""
from typing import Any, Dict, Optional, Union

from drivingschool.schemas.student import ManeuverItem, Progress, ProgressSummary

CODE_MAX_SCORE = 40
CODE_PASS_SCORE = 35

MANEUVER_LABELS = {
    "parking": "Créneau",
    "highway": "Autoroute",
    "city": "Circulation en ville",
    "reverse_parking": "Marche arrière",
    "emergency": "Freinage d'urgence",
}

def percentage(current: float, target: float) -> float:
    """current / target * 100, borné entre 0 et 100"""
    if not target or target <= 0:
        return 0.0
    return max(0.0, min(100.0, current / target * 100))

def is_code_ready(score: int) -> bool:
    return score >= CODE_PASS_SCORE

def code_points_remaining(score: int) -> int:
    return max(0, CODE_PASS_SCORE - score)

def parse_progress(raw: Optional[Union[Progress, Dict[str, Any]]]) -> Progress:
    if isinstance(raw, Progress):
        return raw
    return Progress.model_validate(raw or {})

def summarize_progress(raw: Optional[Union[Progress, Dict[str, Any]]]) -> ProgressSummary:
    progress = parse_progress(raw)
    flags = progress.maneuvers.model_dump()
    maneuvers = [
        ManeuverItem(key=key, label=label, done=bool(flags.get(key)))
        for key, label in MANEUVER_LABELS.items()
    ]
    done = sum(1 for item in maneuvers if item.done)

    return ProgressSummary(
        driving_hours=progress.driving_hours,
        target_hours=progress.target_hours,
        driving_percentage=percentage(progress.driving_hours, progress.target_hours),
        code_score=progress.code_score,
        code_max=CODE_MAX_SCORE,
        code_percentage=percentage(progress.code_score, CODE_MAX_SCORE),
        code_ready=is_code_ready(progress.code_score),
        code_points_remaining=code_points_remaining(progress.code_score),
        maneuvers=maneuvers,
        maneuvers_done=done,
        maneuvers_percentage=percentage(done, len(maneuvers)),
    )
