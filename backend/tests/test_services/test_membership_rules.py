"""Tests for the pure membership state transitions."""

import random

import pytest

from app.core.exceptions import (
    AlreadyMember,
    AlreadyRequested,
    CannotRemoveOwner,
    Forbidden,
    NoPendingRequest,
    NotAcceptingRequests,
    NotAMember,
    OwnerCannotLeave,
    TeamFull,
    TeamServiceError,
    TeamValidationError,
)
from app.services import membership_rules as rules
from tests.mocks.teams import OTHER_PLAYER_ID, OWNER_ID, PLAYER_ID, make_team


class TestRequestToJoin:
    def test_adds_request(self):
        team = make_team()
        rules.request_to_join(team, PLAYER_ID)
        assert team.join_requests == [PLAYER_ID]
        assert team.members == [OWNER_ID]

    def test_private_team_rejects(self):
        team = make_team(is_public=False)
        with pytest.raises(NotAcceptingRequests):
            rules.request_to_join(team, PLAYER_ID)
        assert team.join_requests == []

    def test_full_team_rejects(self):
        team = make_team(max_size=2, members=[OWNER_ID, OTHER_PLAYER_ID])
        with pytest.raises(TeamFull):
            rules.request_to_join(team, PLAYER_ID)

    def test_member_cannot_request(self):
        team = make_team(members=[OWNER_ID, PLAYER_ID])
        with pytest.raises(AlreadyMember):
            rules.request_to_join(team, PLAYER_ID)

    def test_owner_cannot_request(self):
        with pytest.raises(AlreadyMember):
            rules.request_to_join(make_team(), OWNER_ID)

    def test_duplicate_request(self):
        team = make_team(join_requests=[PLAYER_ID])
        with pytest.raises(AlreadyRequested):
            rules.request_to_join(team, PLAYER_ID)
        assert team.join_requests == [PLAYER_ID]

    def test_private_checked_before_capacity(self):
        team = make_team(is_public=False, max_size=2, members=[OWNER_ID, OTHER_PLAYER_ID])
        with pytest.raises(NotAcceptingRequests):
            rules.request_to_join(team, PLAYER_ID)

    def test_capacity_checked_before_membership(self):
        team = make_team(max_size=2, members=[OWNER_ID, PLAYER_ID])
        with pytest.raises(TeamFull):
            rules.request_to_join(team, PLAYER_ID)


class TestCancelJoinRequest:
    def test_removes_request(self):
        team = make_team(join_requests=[PLAYER_ID, OTHER_PLAYER_ID])
        rules.cancel_join_request(team, PLAYER_ID)
        assert team.join_requests == [OTHER_PLAYER_ID]

    def test_without_request(self):
        with pytest.raises(NoPendingRequest, match="You have not requested"):
            rules.cancel_join_request(make_team(), PLAYER_ID)

    def test_request_then_cancel_restores_lists(self):
        team = make_team(join_requests=[OTHER_PLAYER_ID])
        before = (list(team.members), list(team.join_requests))
        rules.request_to_join(team, PLAYER_ID)
        rules.cancel_join_request(team, PLAYER_ID)
        assert (team.members, team.join_requests) == before


class TestAcceptJoinRequest:
    def test_moves_user_to_members(self):
        team = make_team(join_requests=[PLAYER_ID])
        rules.accept_join_request(team, OWNER_ID, PLAYER_ID)
        assert team.members == [OWNER_ID, PLAYER_ID]
        assert team.join_requests == []

    def test_non_owner_forbidden(self):
        team = make_team(members=[OWNER_ID, OTHER_PLAYER_ID], join_requests=[PLAYER_ID])
        with pytest.raises(Forbidden):
            rules.accept_join_request(team, OTHER_PLAYER_ID, PLAYER_ID)
        assert team.join_requests == [PLAYER_ID]

    def test_full_team(self):
        team = make_team(max_size=2, members=[OWNER_ID, OTHER_PLAYER_ID], join_requests=[PLAYER_ID])
        with pytest.raises(TeamFull):
            rules.accept_join_request(team, OWNER_ID, PLAYER_ID)
        assert team.join_requests == [PLAYER_ID]

    def test_no_pending_request(self):
        with pytest.raises(NoPendingRequest):
            rules.accept_join_request(make_team(), OWNER_ID, PLAYER_ID)

    def test_ownership_checked_before_capacity(self):
        team = make_team(max_size=2, members=[OWNER_ID, OTHER_PLAYER_ID], join_requests=[PLAYER_ID])
        with pytest.raises(Forbidden):
            rules.accept_join_request(team, PLAYER_ID, PLAYER_ID)

    def test_private_team_still_accepts(self):
        team = make_team(is_public=False, join_requests=[PLAYER_ID])
        rules.accept_join_request(team, OWNER_ID, PLAYER_ID)
        assert PLAYER_ID in team.members


class TestRejectJoinRequest:
    def test_drops_request(self):
        team = make_team(join_requests=[PLAYER_ID])
        rules.reject_join_request(team, OWNER_ID, PLAYER_ID)
        assert team.join_requests == []
        assert team.members == [OWNER_ID]

    def test_non_owner_forbidden(self):
        team = make_team(join_requests=[PLAYER_ID])
        with pytest.raises(Forbidden):
            rules.reject_join_request(team, PLAYER_ID, PLAYER_ID)

    def test_second_reject_fails(self):
        team = make_team(join_requests=[PLAYER_ID])
        rules.reject_join_request(team, OWNER_ID, PLAYER_ID)
        with pytest.raises(NoPendingRequest):
            rules.reject_join_request(team, OWNER_ID, PLAYER_ID)


class TestJoinDirectly:
    def test_adds_member(self):
        team = make_team()
        rules.join_directly(team, PLAYER_ID)
        assert team.members == [OWNER_ID, PLAYER_ID]

    def test_clears_own_pending_request(self):
        team = make_team(join_requests=[PLAYER_ID, OTHER_PLAYER_ID])
        rules.join_directly(team, PLAYER_ID)
        assert team.join_requests == [OTHER_PLAYER_ID]
        assert team.invariant_violations() == []

    def test_full_team(self):
        team = make_team(max_size=2, members=[OWNER_ID, OTHER_PLAYER_ID])
        with pytest.raises(TeamFull):
            rules.join_directly(team, PLAYER_ID)

    def test_already_member(self):
        with pytest.raises(AlreadyMember):
            rules.join_directly(make_team(), OWNER_ID)

    def test_private_team_allowed_by_default(self):
        team = make_team(is_public=False)
        rules.join_directly(team, PLAYER_ID)
        assert PLAYER_ID in team.members

    def test_private_team_refused_when_public_required(self):
        team = make_team(is_public=False)
        with pytest.raises(NotAcceptingRequests):
            rules.join_directly(team, PLAYER_ID, require_public=True)


class TestLeaveTeam:
    def test_member_leaves(self):
        team = make_team(members=[OWNER_ID, PLAYER_ID])
        rules.leave_team(team, PLAYER_ID)
        assert team.members == [OWNER_ID]

    def test_non_member(self):
        with pytest.raises(NotAMember, match="You are not a member"):
            rules.leave_team(make_team(), PLAYER_ID)

    def test_owner_cannot_leave(self):
        team = make_team(members=[OWNER_ID, PLAYER_ID])
        with pytest.raises(OwnerCannotLeave):
            rules.leave_team(team, OWNER_ID)
        assert team.members == [OWNER_ID, PLAYER_ID]


class TestRemoveMember:
    def test_owner_removes_member(self):
        team = make_team(members=[OWNER_ID, PLAYER_ID])
        rules.remove_member(team, OWNER_ID, PLAYER_ID)
        assert team.members == [OWNER_ID]

    def test_owner_cannot_be_removed_by_owner(self):
        with pytest.raises(CannotRemoveOwner):
            rules.remove_member(make_team(), OWNER_ID, OWNER_ID)

    def test_owner_cannot_be_removed_by_anyone(self):
        team = make_team(members=[OWNER_ID, PLAYER_ID])
        with pytest.raises(CannotRemoveOwner):
            rules.remove_member(team, PLAYER_ID, OWNER_ID)

    def test_non_owner_forbidden(self):
        team = make_team(members=[OWNER_ID, PLAYER_ID, OTHER_PLAYER_ID])
        with pytest.raises(Forbidden):
            rules.remove_member(team, PLAYER_ID, OTHER_PLAYER_ID)

    def test_target_not_member(self):
        with pytest.raises(NotAMember):
            rules.remove_member(make_team(), OWNER_ID, PLAYER_ID)


class TestApplyAttributePatch:
    def test_replaces_named_fields_only(self):
        team = make_team(district="Kothrud")
        rules.apply_attribute_patch(team, OWNER_ID, {"name": "Renamed", "district": None})
        assert team.name == "Renamed"
        assert team.district is None
        assert team.city == "Pune"

    def test_non_owner_forbidden(self):
        team = make_team(members=[OWNER_ID, PLAYER_ID])
        with pytest.raises(Forbidden):
            rules.apply_attribute_patch(team, PLAYER_ID, {"name": "Hijacked"})
        assert team.name == "Sunday Strikers"

    def test_max_size_below_member_count(self):
        team = make_team(members=[OWNER_ID, PLAYER_ID, OTHER_PLAYER_ID])
        with pytest.raises(TeamValidationError) as exc:
            rules.apply_attribute_patch(team, OWNER_ID, {"max_size": 2})
        assert exc.value.details == {"field": "maxSize"}
        assert team.max_size == 5

    def test_max_size_equal_to_member_count(self):
        team = make_team(members=[OWNER_ID, PLAYER_ID])
        rules.apply_attribute_patch(team, OWNER_ID, {"max_size": 2})
        assert team.max_size == 2
        assert team.is_full


class TestRulesPreserveInvariants:
    """Any successful sequence of rules keeps the team consistent."""

    def test_mixed_sequence(self):
        team = make_team(max_size=3)
        rules.request_to_join(team, PLAYER_ID)
        rules.request_to_join(team, OTHER_PLAYER_ID)
        rules.accept_join_request(team, OWNER_ID, PLAYER_ID)
        rules.join_directly(team, OTHER_PLAYER_ID)
        assert team.invariant_violations() == []
        assert team.members == [OWNER_ID, PLAYER_ID, OTHER_PLAYER_ID]
        assert team.join_requests == []

        rules.leave_team(team, PLAYER_ID)
        rules.remove_member(team, OWNER_ID, OTHER_PLAYER_ID)
        assert team.members == [OWNER_ID]
        assert team.invariant_violations() == []

    def test_random_sequences(self):
        users = [OWNER_ID, PLAYER_ID, OTHER_PLAYER_ID, "user-fourth", "user-fifth"]

        for seed in range(5):
            rng = random.Random(seed)
            team = make_team(max_size=rng.randint(2, 4))
            steps = [
                lambda actor, target: rules.request_to_join(team, actor),
                lambda actor, target: rules.cancel_join_request(team, actor),
                lambda actor, target: rules.accept_join_request(team, actor, target),
                lambda actor, target: rules.reject_join_request(team, actor, target),
                lambda actor, target: rules.join_directly(team, actor, require_public=rng.random() < 0.5),
                lambda actor, target: rules.leave_team(team, actor),
                lambda actor, target: rules.remove_member(team, actor, target),
                lambda actor, target: rules.apply_attribute_patch(
                    team, actor, {"max_size": rng.randint(2, 5), "is_public": rng.random() < 0.8}
                ),
            ]
            succeeded = 0

            for _ in range(300):
                actor = OWNER_ID if rng.random() < 0.4 else rng.choice(users)
                target = rng.choice(users)
                before = team.model_copy(deep=True)
                try:
                    rng.choice(steps)(actor, target)
                    succeeded += 1
                except TeamServiceError:
                    assert team == before
                assert team.invariant_violations() == []
                assert team.created_by == OWNER_ID

            assert succeeded > 0
