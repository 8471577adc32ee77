"""Generative assistant features built on a text generation client."""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from nutrition_impact.domain.meal_plans import ChatMessage, MealPlan
from nutrition_impact.domain.reports import WeeklyReport
from nutrition_impact.domain.users import Goal, UserRecord
from nutrition_impact.errors import ExternalServiceError

_logger = logging.getLogger(__name__)

NUTRITION_EXPERT_INSTRUCTION = (
    "You are a nutrition expert. Provide helpful, concise advice."
)
MAX_CHAT_HISTORY = 20
MAX_MEAL_PLAN_DAYS = 14

_MEAL_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "meal": {"type": "string"},
        "name": {"type": "string"},
        "description": {"type": "string"},
        "calories": {"type": "number", "minimum": 0},
        "protein": {"type": "number", "minimum": 0},
        "carbohydrate": {"type": "number", "minimum": 0},
        "fat_total": {"type": "number", "minimum": 0},
    },
    "required": [
        "meal",
        "name",
        "description",
        "calories",
        "protein",
        "carbohydrate",
        "fat_total",
    ],
    "additionalProperties": False,
}

MEAL_PLAN_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "days": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "day": {"type": "integer", "minimum": 1},
                    "meals": {"type": "array", "items": _MEAL_SCHEMA},
                },
                "required": ["day", "meals"],
                "additionalProperties": False,
            },
        },
        "notes": {"anyOf": [{"type": "string"}, {"type": "null"}]},
    },
    "required": ["days", "notes"],
    "additionalProperties": False,
}


class TextGenerationClient(Protocol):
    """Interface for LLM text generation."""

    async def generate_text(self, *, prompt: str, system: str | None) -> str:
        """Return free-form text for a prompt."""

    async def generate_json(
        self,
        *,
        prompt: str,
        system: str | None,
        schema: dict[str, object],
        schema_name: str,
    ) -> dict[str, object]:
        """Return a JSON object matching the schema."""


@dataclass(frozen=True)
class SuggestionResult:
    """Outcome of a best-effort narrative request."""

    text: str | None

    @property
    def available(self) -> bool:
        return self.text is not None


@dataclass(frozen=True)
class ChatReply:
    """Assistant answer with the trimmed conversation history."""

    reply: str
    history: list[ChatMessage]


@dataclass
class AssistantService:
    """Service that prepares prompts and validates assistant output."""

    client: TextGenerationClient
    timeout_seconds: float

    async def weekly_suggestions(self, report: WeeklyReport) -> SuggestionResult:
        """Ask for advice on a weekly report; never fails the caller."""
        prompt = _weekly_prompt(report)
        try:
            text = await asyncio.wait_for(
                self.client.generate_text(
                    prompt=prompt, system=NUTRITION_EXPERT_INSTRUCTION
                ),
                timeout=self.timeout_seconds,
            )
        except TimeoutError:
            _logger.warning(
                "Weekly suggestions timed out after %ss", self.timeout_seconds
            )
            return SuggestionResult(text=None)
        except Exception:
            _logger.exception("Weekly suggestions failed")
            return SuggestionResult(text=None)
        text = text.strip()
        return SuggestionResult(text=text or None)

    async def generate_meal_plan(
        self, user: UserRecord, goal: Goal, days: int
    ) -> MealPlan:
        """Generate a meal plan for the goal; failures raise ExternalServiceError."""
        days = max(1, min(days, MAX_MEAL_PLAN_DAYS))
        prompt = _meal_plan_prompt(user, goal, days)
        try:
            raw = await asyncio.wait_for(
                self.client.generate_json(
                    prompt=prompt,
                    system=NUTRITION_EXPERT_INSTRUCTION,
                    schema=MEAL_PLAN_SCHEMA,
                    schema_name="meal_plan",
                ),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as exc:
            raise ExternalServiceError("Meal plan generation timed out") from exc
        except Exception as exc:
            _logger.exception("Meal plan generation failed: user_id=%s", user.id)
            raise ExternalServiceError("Meal plan generation failed") from exc
        try:
            return MealPlan.model_validate(raw)
        except ValidationError as exc:
            _logger.warning("Meal plan output did not validate: %s", exc)
            raise ExternalServiceError("Meal plan response was malformed") from exc

    async def chat(self, history: list[ChatMessage], message: str) -> ChatReply:
        """Answer a message in the context of the recent conversation."""
        turns = [*history, ChatMessage(role="user", content=message)]
        turns = turns[-MAX_CHAT_HISTORY:]
        prompt = _conversation_prompt(turns)
        try:
            reply = await asyncio.wait_for(
                self.client.generate_text(
                    prompt=prompt, system=NUTRITION_EXPERT_INSTRUCTION
                ),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as exc:
            raise ExternalServiceError("Assistant timed out") from exc
        except Exception as exc:
            _logger.exception("Assistant chat failed")
            raise ExternalServiceError("Assistant is unavailable") from exc
        turns.append(ChatMessage(role="assistant", content=reply))
        return ChatReply(reply=reply, history=turns[-MAX_CHAT_HISTORY:])


def _weekly_prompt(report: WeeklyReport) -> str:
    averages = report.averages.rounded()
    lines = [
        f"Weekly nutrition summary from {report.start} to {report.end}.",
        "Daily averages: " + json.dumps(averages.to_dict()),
    ]
    if report.average_percentages is not None:
        lines.append(
            "Average percent of goal: "
            + json.dumps(report.average_percentages.rounded().to_dict())
        )
    if report.goal is not None:
        lines.append("Daily goal: " + json.dumps(vars(report.goal)))
    lines.append(
        "Give three short, practical suggestions to improve next week's diet."
    )
    return "\n".join(lines)


def _meal_plan_prompt(user: UserRecord, goal: Goal, days: int) -> str:
    targets = goal.targets
    lines = [
        f"Create a {days}-day meal plan for {user.full_name}.",
        "Primary goals: " + ", ".join(goal.primary_goals),
        (
            f"Daily targets: {targets.calories:.0f} kcal, "
            f"{targets.protein:.0f} g protein, "
            f"{targets.carbohydrate:.0f} g carbohydrate, "
            f"{targets.fat_total:.0f} g fat."
        ),
    ]
    if goal.allergies:
        lines.append("Avoid these allergens: " + ", ".join(goal.allergies))
    lines.append("Number days from 1 and list breakfast, lunch and dinner.")
    return "\n".join(lines)


def _conversation_prompt(turns: list[ChatMessage]) -> str:
    rendered = "\n\n".join(
        f"{'User' if turn.role == 'user' else 'Assistant'}: {turn.content}"
        for turn in turns
    )
    return f"{rendered}\n\nAssistant:"
