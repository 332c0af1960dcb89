"""
Scorebook rules for plate appearances.

Plate appearances arrive as mappings with snake_case keys (pa_number,
result_type, result_subtype, notation, rbi_on_play, run_scored). The
validators return a list of error strings; an empty list means valid.
"""

from typing import Any, Iterable, List, Mapping

from schemas.plate_appearance import ComputedBattingStats
from utils.constants import MAX_RBI_PER_PA, PA_RESULT_SUBTYPES, PA_RESULT_TYPES


def is_valid_subtype(result_type: str, subtype: str) -> bool:
    return subtype in PA_RESULT_SUBTYPES.get(result_type, ())


def _field_errors(pa: Mapping[str, Any], strict_rbi_message: bool) -> List[str]:
    errors = []
    result_type = pa.get("result_type")
    subtype = pa.get("result_subtype")

    if not result_type or result_type not in PA_RESULT_TYPES:
        errors.append(f'Invalid result type "{result_type}"')

    if result_type and subtype:
        if not is_valid_subtype(result_type, subtype):
            errors.append(f'Subtype "{subtype}" is not valid for result type "{result_type}"')
    elif not subtype:
        errors.append("Missing result subtype")

    if result_type == "out" and not (pa.get("notation") or "").strip():
        errors.append("Notation is required for outs")

    rbi = pa.get("rbi_on_play")
    if rbi is not None:
        if isinstance(rbi, bool) or not isinstance(rbi, int) or rbi < 0 or rbi > MAX_RBI_PER_PA:
            errors.append(f"RBI must be between 0 and {MAX_RBI_PER_PA}, got {rbi}" if strict_rbi_message
                          else f"RBI must be between 0 and {MAX_RBI_PER_PA}")
        if strict_rbi_message and rbi == MAX_RBI_PER_PA and subtype != "HR":
            errors.append(f"{MAX_RBI_PER_PA} RBI is only valid on a home run")

    return errors


def validate_plate_appearances(pas: List[Mapping[str, Any]]) -> List[str]:
    """Validate one player's plate appearances for a game, including PA numbering."""
    if not pas:
        return []

    errors = []
    seen = set()

    for index, pa in enumerate(pas):
        # Unnumbered PAs take their 1-based position, as they are stored
        pa_number = pa.get("pa_number") or index + 1
        label = f"PA #{pa_number}"

        errors.extend(f"{label}: {message}" for message in _field_errors(pa, strict_rbi_message=True))

        if pa_number in seen:
            errors.append(f"{label}: Duplicate PA number {pa_number}")
        seen.add(pa_number)

    if seen:
        numbers = sorted(seen)
        if numbers[0] != 1:
            errors.append(f"PA numbers must start at 1, got {numbers[0]}")
        for previous, current in zip(numbers, numbers[1:]):
            if current != previous + 1:
                errors.append(f"PA numbers must be sequential: gap between {previous} and {current}")

    return errors


def validate_single_plate_appearance(pa: Mapping[str, Any]) -> List[str]:
    return _field_errors(pa, strict_rbi_message=False)


def compute_stats_from_pas(pas: Iterable[Mapping[str, Any]]) -> ComputedBattingStats:
    stats = ComputedBattingStats()

    for pa in pas:
        stats.plate_appearances += 1
        result_type = pa.get("result_type")
        subtype = pa.get("result_subtype")

        if result_type == "hit":
            stats.at_bats += 1
            stats.hits += 1
            if subtype == "1B":
                stats.singles += 1
            elif subtype == "2B":
                stats.doubles += 1
            elif subtype == "3B":
                stats.triples += 1
            elif subtype == "HR":
                stats.home_runs += 1

        elif result_type == "walk":
            if subtype == "BB":
                stats.walks += 1
            elif subtype == "IBB":
                stats.walks += 1
                stats.intentional_walks += 1
            elif subtype == "HBP":
                stats.hit_by_pitch += 1

        elif result_type == "out":
            stats.at_bats += 1
            if subtype in ("K", "Kc"):
                stats.strikeouts += 1
            elif subtype == "DP":
                stats.ground_into_double_plays += 1

        elif result_type == "sacrifice":
            if subtype == "SAC":
                stats.sacrifice_bunts += 1
            elif subtype == "SF":
                stats.sacrifice_flies += 1

    return stats
