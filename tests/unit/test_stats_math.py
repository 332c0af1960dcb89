from types import SimpleNamespace

import pytest

from services.stats_service import aggregate_batting, aggregate_pitching, innings_to_outs, leaderboard, outs_to_innings


def _who(player_id=1, name="Sam Slugger", team_id=1):
    return dict(
        player_id=player_id,
        player=SimpleNamespace(user=SimpleNamespace(full_name=name)),
        team_id=team_id,
        team=SimpleNamespace(name="Rays", abbreviation="RAY"),
    )


def batting_row(game_id, **counts):
    base = dict(plate_appearances=0, at_bats=0, runs=0, hits=0, doubles=0, triples=0, home_runs=0, rbis=0,
                walks=0, strikeouts=0, stolen_bases=0, caught_stealing=0, hit_by_pitch=0, sacrifice_flies=0)
    base.update(counts)
    return SimpleNamespace(game_id=game_id, **_who(), **base)


def pitching_row(game_id, innings, decision=None, **counts):
    base = dict(hits_allowed=0, runs_allowed=0, earned_runs=0, walks_allowed=0, strikeouts=0, home_runs_allowed=0)
    base.update(counts)
    return SimpleNamespace(game_id=game_id, innings_pitched=innings, decision=decision, **_who(), **base)


class TestInnings:
    """Innings are written as whole.thirds"""

    @pytest.mark.parametrize("innings,outs", [(0, 0), (1, 3), (6.2, 20), ("2.1", 7), (None, 0)])
    def test_to_outs(self, innings, outs):
        assert innings_to_outs(innings) == outs

    def test_to_innings(self):
        assert outs_to_innings(20) == 6.2
        assert outs_to_innings(27) == 9.0
        assert outs_to_innings(1) == 0.1


class TestAggregateBatting:

    def test_rates(self):
        rows = [
            batting_row(1, plate_appearances=7, at_bats=6, hits=2, doubles=1, walks=1, rbis=2),
            batting_row(2, plate_appearances=6, at_bats=4, hits=1, home_runs=1, walks=1, sacrifice_flies=1, rbis=1),
        ]
        [line] = aggregate_batting(rows)

        assert line.games == 2
        assert line.at_bats == 10
        assert line.hits == 3
        assert line.rbi == 3
        assert line.avg == 0.3
        assert line.obp == 0.385
        assert line.slg == 0.7
        assert line.ops == pytest.approx(1.085, abs=0.001)

    def test_no_at_bats(self):
        [line] = aggregate_batting([batting_row(1, plate_appearances=1, walks=1)])
        assert line.avg == 0.0
        assert line.slg == 0.0
        assert line.obp == 1.0


class TestAggregatePitching:

    def test_rates_from_outs(self):
        rows = [
            pitching_row(1, 6.2, decision="W", earned_runs=2, hits_allowed=5, walks_allowed=1, strikeouts=6),
            pitching_row(2, 2.1, decision="L", earned_runs=1, hits_allowed=2, walks_allowed=1, strikeouts=3),
        ]
        [line] = aggregate_pitching(rows)

        assert line.innings_pitched == 9.0
        assert line.wins == 1
        assert line.losses == 1
        assert line.era == 3.0
        assert line.whip == 1.0
        assert line.k_per9 == 9.0

    def test_no_outs_recorded(self):
        [line] = aggregate_pitching([pitching_row(1, 0, earned_runs=3, hits_allowed=4)])
        assert line.innings_pitched == 0.0
        assert line.era == 0.0
        assert line.whip == 0.0


def test_leaderboard_orders_and_ranks():
    rows = [SimpleNamespace(player_id=i, player_name=f"P{i}", team_id=1, team_abbr="RAY", hr=i) for i in range(1, 8)]
    board = leaderboard(rows, lambda r: r.hr)

    assert [e.player_id for e in board] == [7, 6, 5, 4, 3]
    assert [e.rank for e in board] == [1, 2, 3, 4, 5]

    lowest = leaderboard(rows, lambda r: r.hr, ascending=True, size=2)
    assert [e.value for e in lowest] == [1, 2]


def test_leaderboard_ties_break_alphabetically():
    rows = [SimpleNamespace(player_id=i, player_name=name, team_id=1, team_abbr="RAY", hr=4)
            for i, name in enumerate(["Casey", "Alex", "Blake"], start=1)]

    assert [e.player_name for e in leaderboard(rows, lambda r: r.hr)] == ["Alex", "Blake", "Casey"]
    assert [e.player_name for e in leaderboard(rows, lambda r: r.hr, ascending=True)] == ["Alex", "Blake", "Casey"]
