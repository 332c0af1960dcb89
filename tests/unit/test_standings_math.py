from schemas.standings import StandingsRow
from services.scoring_service import pad_innings
from services.standings_service import games_behind, standings_sort_key, win_pct


def row(team_id, wins, losses, diff=0):
    played = wins + losses
    return StandingsRow(
        rank=0, team_id=team_id, team_name=f"T{team_id}", abbreviation=f"T{team_id}",
        wins=wins, losses=losses, ties=0, games_played=played, win_pct=win_pct(wins, played),
        runs_scored=diff if diff > 0 else 0, runs_allowed=-diff if diff < 0 else 0,
        run_differential=diff, games_behind=0.0,
    )


class TestWinPct:

    def test_rounds_to_three_places(self):
        assert win_pct(2, 3) == 0.667

    def test_no_games(self):
        assert win_pct(0, 0) == 0.0


class TestOrdering:
    """Teams sort by win pct, then wins, then run differential"""

    def test_sort(self):
        rows = [row(1, 5, 5), row(2, 8, 2), row(3, 4, 1, diff=3), row(4, 8, 2, diff=10)]
        rows.sort(key=standings_sort_key)
        assert [r.team_id for r in rows] == [4, 2, 3, 1]

    def test_games_behind(self):
        leader, trailer = row(1, 8, 2), row(2, 5, 4)
        assert games_behind(leader, leader) == 0
        assert games_behind(leader, trailer) == 2.5


class TestPadInnings:

    def test_pads_with_zeros(self):
        assert pad_innings([1, 0], 4) == [1, 0, 0, 0]

    def test_does_not_truncate_or_mutate(self):
        scores = [1, 2, 3]
        assert pad_innings(scores, 2) == [1, 2, 3]
        assert pad_innings(None, 1) == [0]
        assert scores == [1, 2, 3]
