"""Tests for care plan activation, cancellation and progress."""

import pytest

from plant_tracker.modules.garden.domain.models.care_plan import NEW_PLANT_ACCLIMATIZATION, RECOVERY_PLAN
from plant_tracker.modules.garden.domain.models.care_task import custom_task_adapter
from plant_tracker.modules.garden.domain.services.care_plan_engine import CarePlanEngine
from plant_tracker.modules.garden.domain.services.schedule_engine import ScheduleEngine
from plant_tracker.shared.core.exceptions import CarePlanError
from plant_tracker.shared.utils.dates import add_days
from tests.conftest import NOW, make_plant


@pytest.fixture
def own_task():
    return custom_task_adapter.validate_python({
        "id": "mine",
        "type": "mist",
        "frequency_days": 3,
        "last_completed": NOW,
    })


# ============================================================================
# Availability
# ============================================================================


def test_healthy_plant_only_gets_acclimatization() -> None:
    templates = CarePlanEngine.available_templates(make_plant(is_healthy=True))
    assert [t.id for t in templates] == [NEW_PLANT_ACCLIMATIZATION.id]


def test_sick_plant_also_gets_recovery_plan() -> None:
    templates = CarePlanEngine.available_templates(make_plant(is_healthy=False))
    assert {t.id for t in templates} == {NEW_PLANT_ACCLIMATIZATION.id, RECOVERY_PLAN.id}


# ============================================================================
# Activation
# ============================================================================


def test_activation_lands_each_step_on_its_plan_day() -> None:
    plant = CarePlanEngine.activate(make_plant(), NEW_PLANT_ACCLIMATIZATION.id, NOW)

    plan = plant.active_care_plan
    assert plan.plan_id == NEW_PLANT_ACCLIMATIZATION.id
    assert plan.start_date == NOW
    assert len(plan.task_ids) == len(NEW_PLANT_ACCLIMATIZATION.steps)

    for step, task_id in zip(NEW_PLANT_ACCLIMATIZATION.steps, plan.task_ids):
        task = plant.find_custom_task(task_id)
        assert task.frequency_days == NEW_PLANT_ACCLIMATIZATION.duration_days
        assert ScheduleEngine.next_due(task.last_completed, task.frequency_days) == add_days(NOW, step.day)


def test_activation_uses_step_labels_and_unique_ids() -> None:
    plant = CarePlanEngine.activate(make_plant(), NEW_PLANT_ACCLIMATIZATION.id, NOW)
    stamp = int(NOW.timestamp() * 1000)

    ids = plant.active_care_plan.task_ids
    assert ids[0] == f"NEW_PLANT_ACCLIMATIZATION-1-{stamp}"
    assert len(set(ids)) == len(ids)

    rotate = plant.find_custom_task(ids[2])
    assert rotate.display_name == "Rotate Pot"
    assert plant.find_custom_task(ids[1]).display_name == "Check soil moisture (don't water)"


def test_activation_does_not_touch_original_plant() -> None:
    original = make_plant()
    CarePlanEngine.activate(original, NEW_PLANT_ACCLIMATIZATION.id, NOW)

    assert original.active_care_plan is None
    assert original.custom_tasks == []


def test_unknown_template_rejected() -> None:
    with pytest.raises(CarePlanError):
        CarePlanEngine.activate(make_plant(), "NOPE", NOW)


def test_recovery_plan_rejected_for_healthy_plant() -> None:
    with pytest.raises(CarePlanError) as exc_info:
        CarePlanEngine.activate(make_plant(is_healthy=True), RECOVERY_PLAN.id, NOW)
    assert exc_info.value.status_code == 400


def test_second_plan_rejected_while_one_is_active() -> None:
    plant = CarePlanEngine.activate(make_plant(is_healthy=False), RECOVERY_PLAN.id, NOW)

    with pytest.raises(CarePlanError):
        CarePlanEngine.activate(plant, NEW_PLANT_ACCLIMATIZATION.id, NOW)


# ============================================================================
# Cancellation
# ============================================================================


def test_cancel_removes_exactly_the_plan_tasks(own_task) -> None:
    plant = make_plant().model_copy(update={"custom_tasks": [own_task]})
    active = CarePlanEngine.activate(plant, NEW_PLANT_ACCLIMATIZATION.id, NOW)

    cancelled = CarePlanEngine.cancel(active)

    assert cancelled.active_care_plan is None
    assert [t.id for t in cancelled.custom_tasks] == ["mine"]


def test_cancel_without_plan_is_noop(own_task) -> None:
    plant = make_plant().model_copy(update={"custom_tasks": [own_task]})
    assert CarePlanEngine.cancel(plant) is plant


# ============================================================================
# Progress
# ============================================================================


def test_progress_none_without_plan() -> None:
    assert CarePlanEngine.progress(make_plant(), NOW) is None


def test_progress_counts_days_and_done_steps() -> None:
    plant = CarePlanEngine.activate(make_plant(), NEW_PLANT_ACCLIMATIZATION.id, NOW)

    progress = CarePlanEngine.progress(plant, add_days(NOW, 3))

    assert progress.day_of_plan == 4
    assert progress.percent == pytest.approx(4 / 14 * 100)
    assert [t.done for t in progress.tasks] == [True, False, False, False, False]


def test_progress_percent_is_capped() -> None:
    plant = CarePlanEngine.activate(make_plant(), NEW_PLANT_ACCLIMATIZATION.id, NOW)

    progress = CarePlanEngine.progress(plant, add_days(NOW, 40))

    assert progress.percent == 100.0
    assert all(t.done for t in progress.tasks)
