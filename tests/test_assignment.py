"""Tests for rostermatch.assignment module."""

import numpy as np
import pytest

from rostermatch import ExtractedName, RosterMember
from rostermatch.assignment import (
    assignment_score,
    build_score_matrix,
    reconcile,
    solve_assignment,
)
from rostermatch.scoring import SIMPLE, score_member


def _member(**kwargs) -> RosterMember:
    """Create a RosterMember with defaults."""
    defaults = dict(id='TAC001', surname='Mensah', first_name='Kofi')
    defaults.update(kwargs)
    return RosterMember(**defaults)


def _names(*names: str) -> list[ExtractedName]:
    """Create ExtractedNames with 1-based positions."""
    return [ExtractedName(name, i) for i, name in enumerate(names, start=1)]


def _matched_ids(results) -> list:
    return [r.matched_member.id if r.matched_member else None for r in results]


class TestSolveAssignment:
    """Tests for the rectangular assignment solver."""

    def test_beats_greedy(self):
        # Greedy would take (0, 0) first and leave row 1 with 0.1
        matrix = [[0.9, 0.8], [0.85, 0.1]]
        assert solve_assignment(matrix) == [1, 0]

    def test_more_rows_than_columns(self):
        matrix = [[0.9, 0.2], [0.3, 0.8], [0.5, 0.5]]
        assert solve_assignment(matrix) == [0, 1, None]

    def test_more_columns_than_rows(self):
        matrix = [[0.1, 0.2, 0.9], [0.8, 0.1, 0.3]]
        assert solve_assignment(matrix) == [2, 0]

    def test_single_row(self):
        assert solve_assignment([[0.2, 0.7, 0.5]]) == [1]

    def test_single_column(self):
        assert solve_assignment([[0.9], [0.8], [0.95]]) == [None, None, 0]

    def test_empty(self):
        assert solve_assignment([]) == []
        assert solve_assignment(np.zeros((0, 4))) == []
        assert solve_assignment(np.zeros((3, 0))) == [None, None, None]

    def test_columns_never_reused(self):
        rng = np.random.default_rng(7)
        matrix = rng.random((6, 4))
        assigned = [c for c in solve_assignment(matrix) if c is not None]
        assert len(assigned) == 4
        assert len(set(assigned)) == 4


class TestAssignmentScore:
    """Tests for total assignment score."""

    def test_total(self):
        matrix = [[0.9, 0.8], [0.85, 0.1]]
        assert assignment_score(matrix, [1, 0]) == pytest.approx(1.65)

    def test_unassigned_rows_ignored(self):
        assert assignment_score([[0.9], [0.8]], [0, None]) == pytest.approx(0.9)


class TestBuildScoreMatrix:
    """Tests for score matrix construction."""

    def test_shape_and_values(self, roster):
        names = _names('Mensah Kofi', 'Owusu Ama')
        matrix = build_score_matrix(names, roster)
        assert matrix.shape == (2, 3)
        assert matrix[1, 1] == score_member('Owusu Ama', roster[1], 2)

    def test_empty(self, roster):
        assert build_score_matrix([], roster).shape == (0, 3)


class TestReconcileScenarios:
    """End-to-end reconciliation scenarios."""

    def test_exact_full_name(self, roster):
        results = reconcile([ExtractedName('Mensah Kofi Agyeman', 1)], roster)
        assert len(results) == 1
        assert results[0].matched_member.id == 'TAC001'
        assert results[0].confidence > 0.8
        assert results[0].is_from_alias is False

    def test_typo_tolerated(self, roster):
        results = reconcile([ExtractedName('Mensaa Kofi', 1)], roster)
        assert results[0].matched_member.id == 'TAC001'

    def test_no_match(self, roster):
        results = reconcile([ExtractedName('Elizabeth Windsor', 1)], roster)
        assert results[0].matched_member is None
        assert results[0].confidence < 0.5

    def test_simple_scheme(self, roster):
        results = reconcile(_names('Mensah Kofi Agyeman', 'Ama Owusu'), roster, scheme=SIMPLE)
        assert _matched_ids(results) == ['TAC001', 'TAC002']

    def test_full_page(self, roster):
        results = reconcile(
            _names('Asante Kwame', 'Owusu Ama', 'Mensah Kofi'), roster,
        )
        assert _matched_ids(results) == ['TAC003', 'TAC002', 'TAC001']
        assert [r.position for r in results] == [1, 2, 3]

    def test_global_optimality(self, roster):
        # Both rows are closest to Owusu Ama; the exact row keeps her and
        # the other row moves to its next-best member.
        roster = roster + [_member(id='TAC004', surname='Owusu', first_name='Abena')]
        results = reconcile(_names('Owusu Ama', 'Owusu Amma'), roster)
        assert _matched_ids(results) == ['TAC002', 'TAC004']

    def test_position_breaks_tie(self):
        roster = [_member(id='TAC010'), _member(id='TAC011')]
        results = reconcile(
            [ExtractedName('Kofi Mensah', 2)], roster,
            position_map={'tac010': 7, 'tac011': 2},
        )
        assert results[0].matched_member.id == 'TAC011'

    def test_known_position_on_record(self):
        roster = [_member(id='TAC010', known_position=7), _member(id='TAC011', known_position=2)]
        results = reconcile([ExtractedName('Kofi Mensah', 2)], roster)
        assert results[0].matched_member.id == 'TAC011'


class TestReconcileBoundaries:
    """Empty and rectangular inputs."""

    def test_empty_extracted(self, roster):
        assert reconcile([], roster) == []

    def test_empty_roster(self):
        results = reconcile(_names('Kofi Mensah', 'Ama Owusu'), [])
        assert len(results) == 2
        for r in results:
            assert r.matched_member is None
            assert r.confidence == 0.0
            assert r.alternatives == []

    def test_more_names_than_members(self, roster):
        results = reconcile(
            _names('Mensah Kofi', 'Owusu Ama', 'Asante Kwame', 'Kofi Mensa'), roster,
        )
        assert len(results) == 4
        assert _matched_ids(results)[3] is None

    def test_single_member_many_names(self):
        results = reconcile(_names('Ama Owusu', 'Kofi Mensah'), [_member()])
        assert _matched_ids(results) == [None, 'TAC001']

    def test_empty_name_string(self, roster):
        results = reconcile([ExtractedName('', 1)], roster)
        assert results[0].matched_member is None

    def test_nan_position(self, roster):
        results = reconcile(
            [ExtractedName('Mensah Kofi', float('nan'))], roster,
            position_map={'tac001': 1},
        )
        assert results[0].matched_member.id == 'TAC001'


class TestReconcileInvariants:
    """Uniqueness, determinism and alternatives."""

    def test_no_member_assigned_twice(self, roster):
        results = reconcile(_names('Kofi Mensah', 'Kofi Mensah', 'Kofi Mensa', 'K. Mensah'), roster)
        ids = [i for i in _matched_ids(results) if i is not None]
        assert len(ids) == len(set(ids))
        assert ids.count('TAC001') == 1

    def test_deterministic(self, roster):
        names = _names('Owusu Ama', 'Mensaa Kofi', 'Kwame Asante', 'Someone Else')
        alias_map = {'someone else': 'TAC999'}
        position_map = {'tac001': 2, 'tac002': 1}
        first = reconcile(names, roster, alias_map, position_map)
        second = reconcile(names, roster, alias_map, position_map)
        assert first == second

    def test_alternatives_exclude_match(self, roster):
        roster = roster + [_member(id='TAC004', surname='Owusu', first_name='Abena')]
        results = reconcile([ExtractedName('Owusu Ama', 1)], roster)
        alt_ids = [c.member.id for c in results[0].alternatives]
        assert results[0].matched_member.id == 'TAC002'
        assert 'TAC002' not in alt_ids
        assert 'TAC004' in alt_ids
        assert len(alt_ids) <= 3
        assert all(c.score >= 0.4 for c in results[0].alternatives)

    def test_sub_threshold_assignment_kept_as_alternative(self, roster):
        results = reconcile([ExtractedName('Owusu', 1)], roster, accept_threshold=0.95)
        assert results[0].matched_member is None
        assert results[0].alternatives[0].member.id == 'TAC002'


class TestReconcileAliases:
    """Alias short-circuiting."""

    def test_alias_wins_over_fuzzy(self, roster):
        results = reconcile(
            [ExtractedName('Mensah Kofi Agyeman', 1)], roster,
            alias_map={'mensah kofi agyeman': 'TAC002'},
        )
        assert results[0].matched_member.id == 'TAC002'
        assert results[0].confidence == 0.98
        assert results[0].is_from_alias is True

    def test_aliased_member_leaves_pool(self, roster):
        results = reconcile(
            _names('Ama O.', 'Owusu Ama'), roster,
            alias_map={'ama o.': 'tac002'},
        )
        assert results[0].matched_member.id == 'TAC002'
        assert results[1].matched_member is None or results[1].matched_member.id != 'TAC002'
        assert 'TAC002' not in [c.member.id for c in results[1].alternatives]

    def test_dangling_alias_falls_through(self, roster):
        results = reconcile(
            [ExtractedName('Mensah Kofi Agyeman', 1)], roster,
            alias_map={'mensah kofi agyeman': 'TAC999'},
        )
        assert results[0].matched_member.id == 'TAC001'
        assert results[0].is_from_alias is False

    def test_two_aliases_same_member(self, roster):
        results = reconcile(
            _names('Kofi M', 'K Mensah'), roster,
            alias_map={'kofi m': 'TAC001', 'k mensah': 'TAC001'},
        )
        assert results[0].is_from_alias is True
        assert results[0].matched_member.id == 'TAC001'
        assert results[1].is_from_alias is False
        assert results[1].matched_member is None or results[1].matched_member.id != 'TAC001'


class TestReconcileErrors:
    """Caller errors raise ValueError."""

    def test_duplicate_roster_ids(self):
        with pytest.raises(ValueError, match='Duplicate member id'):
            reconcile(_names('Kofi'), [_member(), _member()])

    def test_unknown_scheme(self, roster):
        with pytest.raises(ValueError, match='Unknown scoring scheme'):
            reconcile(_names('Kofi'), roster, scheme='blended')

    def test_invalid_threshold(self, roster):
        with pytest.raises(ValueError, match='accept_threshold'):
            reconcile(_names('Kofi'), roster, accept_threshold=-0.1)
