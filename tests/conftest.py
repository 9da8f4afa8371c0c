"""Shared test fixtures."""

import pytest

from rostermatch import RosterMember


@pytest.fixture
def roster() -> list[RosterMember]:
    """Small roster of three members."""
    return [
        RosterMember(id='TAC001', surname='Mensah', first_name='Kofi', other_names='Agyeman'),
        RosterMember(id='TAC002', surname='Owusu', first_name='Ama'),
        RosterMember(id='TAC003', surname='Asante', first_name='Kwame', other_names='Nkrumah'),
    ]
