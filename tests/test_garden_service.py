"""Tests for the garden application service: persistence, AI flows and sessions."""

import pytest

from plant_tracker.modules.garden.application.garden_service import (
    ANALYSIS_ERROR_MESSAGE,
    CHAT_ERROR_MESSAGE,
    RECOMMENDATION_ERROR_MESSAGE,
    REANALYSIS_ERROR_MESSAGE,
    GardenService,
)
from plant_tracker.modules.garden.application.session_manager import GardenSessionManager, display_name_for
from plant_tracker.modules.garden.domain.models.achievement import AchievementId
from plant_tracker.modules.garden.domain.models.garden import CareTaskKind, ChatRole
from plant_tracker.modules.garden.domain.services.plant_assistant import ReanalysisResult
from plant_tracker.shared.config.settings import Settings
from plant_tracker.shared.core.exceptions import PlantIdentificationError, RepositoryError, ValidationError
from tests.conftest import BrokenRepository, FakeClock, make_diagnosis


def _identification_error() -> PlantIdentificationError:
    return PlantIdentificationError("model unavailable", provider="fake")


# ============================================================================
# Persistence
# ============================================================================


@pytest.mark.asyncio
async def test_every_commit_is_persisted(service, repository) -> None:
    plant = await service.add_plant("aW1n", make_diagnosis())
    await service.complete_task(plant.id, CareTaskKind.WATERING)

    assert repository.save_count == 2
    stored = await repository.load_profile("ana@example.com")
    assert stored.profile.growth_points == 60
    assert stored.plants[0].id == plant.id


@pytest.mark.asyncio
async def test_noop_mutations_are_not_persisted(service, repository) -> None:
    assert await service.delete_plant("missing") is False
    assert await service.complete_task("missing", CareTaskKind.WATERING) is None

    assert repository.save_count == 0


@pytest.mark.asyncio
async def test_failed_save_keeps_session_state(store, assistant) -> None:
    repository = BrokenRepository()
    service = GardenService("ana@example.com", store, repository, assistant)

    plant = await service.add_plant("aW1n", make_diagnosis())

    assert repository.save_attempts == 1
    assert service.store.get_plant(plant.id) is not None
    assert "backend down" in service.last_persist_error


@pytest.mark.asyncio
async def test_successful_save_clears_last_error(service) -> None:
    service.last_persist_error = "earlier failure"
    assert await service.persist() is True
    assert service.last_persist_error is None


@pytest.mark.asyncio
async def test_load_starts_fresh_garden(repository, assistant) -> None:
    service = await GardenService.load("bob@example.com", repository, assistant, display_name="bob")

    assert service.store.profile.name == "bob"
    assert service.store.plants == []


@pytest.mark.asyncio
async def test_load_restores_saved_garden(service, repository, assistant) -> None:
    await service.add_plant("aW1n", make_diagnosis())

    restored = await GardenService.load("ana@example.com", repository, assistant, clock=FakeClock())

    assert restored.store.data == service.store.data


@pytest.mark.asyncio
async def test_load_failure_propagates(assistant) -> None:
    with pytest.raises(RepositoryError):
        await GardenService.load("ana@example.com", BrokenRepository(fail_load=True), assistant)


# ============================================================================
# Analysis and re-identification
# ============================================================================


@pytest.mark.asyncio
async def test_analyze_image_returns_diagnosis_without_storing(service, assistant) -> None:
    outcome = await service.analyze_image("aW1n")

    assert outcome.ok
    assert outcome.diagnosis == assistant.diagnosis
    assert service.store.plants == []


@pytest.mark.asyncio
async def test_analyze_image_failure_becomes_message(service, assistant) -> None:
    assistant.error = _identification_error()

    outcome = await service.analyze_image("aW1n")

    assert not outcome.ok
    assert outcome.error == ANALYSIS_ERROR_MESSAGE


@pytest.mark.asyncio
async def test_analyze_image_requires_image(service) -> None:
    with pytest.raises(ValidationError):
        await service.analyze_image("")


@pytest.mark.asyncio
async def test_accepted_reidentification_updates_plant(service, assistant) -> None:
    plant = await service.add_plant("aW1n", make_diagnosis())
    assistant.reanalysis = ReanalysisResult(
        is_suggestion_accepted=True,
        reasoning="Split leaves match.",
        new_analysis=make_diagnosis("Split-leaf philodendron", "Thaumatophyllum bipinnatifidum"),
    )

    result = await service.reidentify_plant(plant.id, "Philodendron")

    assert result.success
    assert result.message == "Identification updated successfully!"
    assert result.plant.name == "Split-leaf philodendron"
    assert result.plant.history[0].note == "Identification updated to Split-leaf philodendron. Split leaves match."
    assert AchievementId.FIRST_DIARY_NOTE in service.store.unlocked_achievements
    # 50 for the plant, 15 for the diary entry
    assert service.store.profile.growth_points == 65


@pytest.mark.asyncio
async def test_rejected_reidentification_changes_nothing(service, assistant) -> None:
    plant = await service.add_plant("aW1n", make_diagnosis())
    assistant.reanalysis = ReanalysisResult(is_suggestion_accepted=False, reasoning="Leaves are too small.")

    result = await service.reidentify_plant(plant.id, "Philodendron")

    assert not result.success
    assert result.message == "The AI could not confirm the suggestion. Reason: Leaves are too small."
    assert service.store.get_plant(plant.id) == plant


@pytest.mark.asyncio
async def test_reidentification_failures(service, assistant) -> None:
    plant = await service.add_plant("aW1n", make_diagnosis())

    missing = await service.reidentify_plant("missing", "Philodendron")
    assert missing.message == "Plant not found."

    assistant.error = _identification_error()
    failed = await service.reidentify_plant(plant.id, "Philodendron")
    assert failed.message == REANALYSIS_ERROR_MESSAGE

    with pytest.raises(ValidationError):
        await service.reidentify_plant(plant.id, "   ")


# ============================================================================
# Recommendations and chat
# ============================================================================


@pytest.mark.asyncio
async def test_recommend_sends_plant_names(service, assistant) -> None:
    await service.add_plant("aW1n", make_diagnosis("Monstera"))
    await service.add_plant("aW1n", make_diagnosis("Fern"))

    outcome = await service.recommend()

    assert assistant.recommend_calls == [["Monstera", "Fern"]]
    assert outcome.recommendations[0].popular_name == "Pothos"
    assert outcome.error is None


@pytest.mark.asyncio
async def test_recommend_failure_becomes_message(service, assistant) -> None:
    assistant.error = _identification_error()

    outcome = await service.recommend()

    assert outcome.recommendations == []
    assert outcome.error == RECOMMENDATION_ERROR_MESSAGE


@pytest.mark.asyncio
async def test_chat_passes_prior_history(service, assistant, repository) -> None:
    reply = await service.send_chat_message("How often should I water?")

    message, history = assistant.chat_calls[0]
    assert message == "How often should I water?"
    assert [m.id for m in history] == ["init"]

    assert reply.role is ChatRole.MODEL
    assert reply.text == assistant.reply
    assert [m.role for m in service.store.chat_history] == [ChatRole.MODEL, ChatRole.USER, ChatRole.MODEL]
    assert repository.save_count == 2


@pytest.mark.asyncio
async def test_chat_failure_appends_fallback(service, assistant) -> None:
    assistant.error = _identification_error()

    reply = await service.send_chat_message("Hello?")

    assert reply.text == CHAT_ERROR_MESSAGE
    assert service.store.chat_history[-2].text == "Hello?"


@pytest.mark.asyncio
async def test_empty_chat_message_rejected(service) -> None:
    with pytest.raises(ValidationError):
        await service.send_chat_message("  ")


# ============================================================================
# Session manager
# ============================================================================


def test_display_name_for_user_key() -> None:
    assert display_name_for("ana@example.com") == "ana"
    assert display_name_for("device-1234") == "device-1234"


@pytest.mark.asyncio
async def test_session_manager_reuses_sessions(repository, assistant) -> None:
    manager = GardenSessionManager(repository, assistant, settings=Settings(), clock=FakeClock())

    first = await manager.get("ana@example.com")
    second = await manager.get("ana@example.com")
    other = await manager.get("bob@example.com")

    assert first is second
    assert other is not first
    assert first.store.profile.name == "ana"
    assert manager.active_sessions == 2

    manager.drop("bob@example.com")
    assert manager.active_sessions == 1
