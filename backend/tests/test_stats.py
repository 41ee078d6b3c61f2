from tictactoe.services.matches import StatsTracker


def test_unknown_player_gets_zero_record():
    stats = StatsTracker()
    record = stats.get_player('ghost')
    assert record == {
        'player': 'ghost',
        'wins': 0,
        'losses': 0,
        'streak': 0,
        'max_streak': 0,
        'total': 0,
        'win_rate': 0,
    }


def test_record_outcome_updates_both_players():
    stats = StatsTracker()
    stats.record_outcome('alice', 'bob')
    alice = stats.get_player('alice')
    bob = stats.get_player('bob')
    assert alice['wins'] == 1 and alice['losses'] == 0
    assert alice['streak'] == 1 and alice['max_streak'] == 1
    assert bob['losses'] == 1 and bob['wins'] == 0
    assert bob['streak'] == 0
    assert alice['win_rate'] == 100
    assert bob['win_rate'] == 0


def test_streak_resets_on_loss_and_max_streak_is_kept():
    stats = StatsTracker()
    stats.record_outcome('alice', 'bob')
    stats.record_outcome('alice', 'bob')
    stats.record_outcome('alice', 'carol')
    assert stats.get_player('alice')['streak'] == 3
    stats.record_outcome('bob', 'alice')
    alice = stats.get_player('alice')
    assert alice['streak'] == 0
    assert alice['max_streak'] == 3
    stats.record_outcome('alice', 'bob')
    alice = stats.get_player('alice')
    assert alice['streak'] == 1
    assert alice['max_streak'] == 3


def test_win_rate_is_percentage():
    stats = StatsTracker()
    stats.record_outcome('alice', 'bob')
    stats.record_outcome('bob', 'alice')
    stats.record_outcome('alice', 'bob')
    alice = stats.get_player('alice')
    assert alice['total'] == 3
    assert alice['win_rate'] == 2 / 3 * 100


def test_leaderboard_orders_by_win_rate():
    stats = StatsTracker()
    stats.record_outcome('alice', 'bob')
    stats.record_outcome('carol', 'alice')
    board = stats.get_leaderboard()
    assert [e['player'] for e in board] == ['carol', 'alice', 'bob']
    assert board[0]['win_rate'] == 100


def test_leaderboard_ties_break_on_wins_then_name():
    stats = StatsTracker()
    stats.record_outcome('zed', 'loser1')
    stats.record_outcome('zed', 'loser2')
    stats.record_outcome('amy', 'loser3')
    stats.record_outcome('bea', 'loser4')
    top = [e['player'] for e in stats.get_leaderboard(3)]
    assert top == ['zed', 'amy', 'bea']


def test_leaderboard_respects_limit():
    stats = StatsTracker()
    for i in range(15):
        stats.ensure_player(f'p{i:02d}')
    assert len(stats.get_leaderboard()) == 10
    assert len(stats.get_leaderboard(limit=3)) == 3
    assert stats.get_leaderboard(limit=0) == []


def test_snapshots_are_copies():
    stats = StatsTracker()
    snapshot = stats.get_player('alice')
    snapshot['wins'] = 99
    assert stats.get_player('alice')['wins'] == 0
