"""Tests for goal derivation and goal list management."""

from datetime import date
from uuid import uuid4

import pytest

from nutrition_impact.domain.users import ActivityLevel, Gender, PrimaryGoal
from nutrition_impact.errors import NotFoundError, PreconditionFailedError
from nutrition_impact.services.goals import (
    FUTURE_BIRTH_DATE_MESSAGE,
    INCOMPLETE_PROFILE_MESSAGE,
    GoalRequest,
    GoalService,
    GoalUpdate,
    age_on,
    compute_bmr,
    derive_targets,
)
from tests.conftest import USER_ID, make_profile

TODAY = date(2024, 6, 1)


def _request(*goals: PrimaryGoal) -> GoalRequest:
    return GoalRequest(
        primary_goals=goals,
        activity_level=ActivityLevel.MODERATELY_ACTIVE,
        target_weight_kg=75.0,
        current_weight_kg=80.0,
    )


def test_age_counts_only_completed_years() -> None:
    assert age_on(date(1990, 6, 2), TODAY) == 33
    assert age_on(date(1990, 6, 1), TODAY) == 34


def test_age_before_birth_is_negative() -> None:
    assert age_on(date(2030, 1, 1), date(2024, 1, 1)) == -6


def test_future_birth_date_is_rejected() -> None:
    profile = make_profile(birth_date=date(2030, 1, 1))

    with pytest.raises(PreconditionFailedError) as excinfo:
        compute_bmr(profile, TODAY)

    assert excinfo.value.message == FUTURE_BIRTH_DATE_MESSAGE


def test_bmr_for_thirty_year_old_male() -> None:
    profile = make_profile(
        birth_date=date(1994, 1, 1), current_weight_kg=70.0, height_cm=175.0
    )

    assert compute_bmr(profile, TODAY) == pytest.approx(1648.75)


def test_maintenance_example_at_2000_kcal() -> None:
    profile = make_profile(
        birth_date=date(1994, 1, 1),
        current_weight_kg=70.0,
        height_cm=175.0,
        activity_level_factor=2000 / 1648.75,
    )

    derived = derive_targets(profile, (PrimaryGoal.MAINTENANCE,), 70.0, TODAY)

    assert round(derived.tdee, 1) == 2000.0
    targets = derived.targets
    assert round(targets.calories, 1) == 2000.0
    assert round(targets.protein, 1) == 84.0
    assert round(targets.fat_total, 1) == 55.6
    assert round(targets.carbohydrate, 1) == 291.0


def test_compute_bmr_for_male_and_female() -> None:
    assert compute_bmr(make_profile(), TODAY) == pytest.approx(1760.0)
    assert compute_bmr(make_profile(gender=Gender.FEMALE), TODAY) == pytest.approx(
        1594.0
    )


def test_maintenance_targets() -> None:
    derived = derive_targets(
        make_profile(), (PrimaryGoal.MAINTENANCE,), 80.0, TODAY
    )

    assert derived.tdee == pytest.approx(2640.0)
    targets = derived.targets
    assert targets.calories == pytest.approx(2640.0)
    assert targets.protein == pytest.approx(96.0)
    assert targets.fat_total == pytest.approx(73.333, rel=1e-4)
    assert targets.carbohydrate == pytest.approx(399.0)
    assert targets.fiber == 25
    assert targets.sodium == 2300
    assert targets.potassium == 3400


def test_weight_loss_targets() -> None:
    targets = derive_targets(
        make_profile(), (PrimaryGoal.WEIGHT_LOSS,), 80.0, TODAY
    ).targets

    assert targets.calories == pytest.approx(2390.0)
    assert targets.protein == pytest.approx(80.0)
    assert targets.carbohydrate == pytest.approx(368.125)


def test_stacked_goals_use_last_matching_rule() -> None:
    targets = derive_targets(
        make_profile(),
        (PrimaryGoal.MUSCLE_GAIN, PrimaryGoal.WEIGHT_LOSS),
        80.0,
        TODAY,
    ).targets

    assert targets.calories == pytest.approx(2940.0)
    assert targets.protein == pytest.approx(144.0)


def test_goal_without_calorie_rule_uses_tdee() -> None:
    targets = derive_targets(
        make_profile(), (PrimaryGoal.IMPROVE_HEALTH,), 80.0, TODAY
    ).targets

    assert targets.calories == pytest.approx(2640.0)
    assert targets.protein == pytest.approx(80.0)


def test_female_micronutrients() -> None:
    targets = derive_targets(
        make_profile(gender=Gender.FEMALE), (PrimaryGoal.MAINTENANCE,), 80.0, TODAY
    ).targets

    assert targets.iron == 18
    assert targets.magnesium == 310
    assert targets.vitamin_a == 700


@pytest.mark.parametrize(
    "overrides",
    [
        {"current_weight_kg": None},
        {"height_cm": None},
        {"gender": None},
        {"birth_date": None},
        {"activity_level_factor": None},
    ],
)
def test_incomplete_profile_is_rejected(overrides) -> None:
    with pytest.raises(PreconditionFailedError) as excinfo:
        derive_targets(
            make_profile(**overrides), (PrimaryGoal.MAINTENANCE,), 80.0, TODAY
        )

    assert excinfo.value.message == INCOMPLETE_PROFILE_MESSAGE


def test_create_goal_without_profile_does_not_write(user_repository) -> None:
    service = GoalService(user_repository)

    with pytest.raises(PreconditionFailedError):
        service.create_goal(USER_ID, _request(PrimaryGoal.MAINTENANCE), TODAY)

    assert user_repository.users[USER_ID].goal_book.goals == ()


def test_first_goal_becomes_current(user_repository) -> None:
    service = GoalService(user_repository)
    user_repository.save_health_profile(USER_ID, make_profile())

    first = service.create_goal(USER_ID, _request(PrimaryGoal.MAINTENANCE), TODAY)
    second = service.create_goal(USER_ID, _request(PrimaryGoal.WEIGHT_LOSS), TODAY)

    assert first.current_index == 0
    assert second.current_index == 0
    assert len(second.goals) == 2
    assert service.list_goals(USER_ID).current.targets.calories == pytest.approx(
        2640.0
    )


def test_delete_goal_shifts_and_clears_pointer(user_repository) -> None:
    service = GoalService(user_repository)
    user_repository.save_health_profile(USER_ID, make_profile())
    for goal in (
        PrimaryGoal.MAINTENANCE,
        PrimaryGoal.WEIGHT_LOSS,
        PrimaryGoal.MUSCLE_GAIN,
    ):
        service.create_goal(USER_ID, _request(goal), TODAY)
    service.set_current_goal(USER_ID, 2)

    shifted = service.delete_goal(USER_ID, 0)
    assert shifted.current_index == 1
    assert shifted.current.primary_goals == (PrimaryGoal.MUSCLE_GAIN,)

    cleared = service.delete_goal(USER_ID, 1)
    assert cleared.current_index is None
    assert cleared.current is None


def test_delete_goal_after_current_keeps_pointer(user_repository) -> None:
    service = GoalService(user_repository)
    user_repository.save_health_profile(USER_ID, make_profile())
    for goal in (
        PrimaryGoal.MAINTENANCE,
        PrimaryGoal.WEIGHT_LOSS,
        PrimaryGoal.MUSCLE_GAIN,
    ):
        service.create_goal(USER_ID, _request(goal), TODAY)
    service.set_current_goal(USER_ID, 1)

    goal_book = service.delete_goal(USER_ID, 2)

    assert goal_book.current_index == 1
    assert goal_book.current.primary_goals == (PrimaryGoal.WEIGHT_LOSS,)


def test_goal_index_must_exist(user_repository) -> None:
    service = GoalService(user_repository)

    with pytest.raises(NotFoundError):
        service.set_current_goal(USER_ID, 0)
    with pytest.raises(NotFoundError):
        service.delete_goal(USER_ID, 3)


def test_update_goal_keeps_targets(user_repository) -> None:
    service = GoalService(user_repository)
    user_repository.save_health_profile(USER_ID, make_profile())
    service.create_goal(USER_ID, _request(PrimaryGoal.MAINTENANCE), TODAY)

    updated = service.update_goal(
        USER_ID,
        0,
        GoalUpdate(
            primary_goals=(PrimaryGoal.MUSCLE_GAIN,),
            allergies=("peanut",),
        ),
    )

    goal = updated.goals[0]
    assert goal.primary_goals == (PrimaryGoal.MUSCLE_GAIN,)
    assert goal.allergies == ("peanut",)
    assert goal.target_weight_kg == 75.0
    assert goal.targets.calories == pytest.approx(2640.0)


def test_unknown_user_raises_not_found(user_repository) -> None:
    with pytest.raises(NotFoundError):
        GoalService(user_repository).list_goals(uuid4())
