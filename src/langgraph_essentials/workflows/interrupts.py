"""
langgraph_essentials.workflows.interrupts

Human-in-the-loop decision contract.

Responsibilities:
- Validate the value a human supplies when resuming an interrupted review.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, model_validator

ReviewAction = Literal["approve", "edit", "revise", "reject"]
REVIEW_ACTIONS: tuple[str, ...] = ("approve", "edit", "revise", "reject")


class ReviewDecision(BaseModel):
    """
    Resume value for the `human_review` node.

    A bare string is accepted as shorthand for `{"action": <string>}`.
    """

    action: ReviewAction
    edited_draft: str | None = None
    feedback: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _coerce_shorthand(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"action": value.strip().lower()}
        return value

    @model_validator(mode="after")
    def _check_required_fields(self) -> ReviewDecision:
        if self.action == "edit" and not (self.edited_draft or "").strip():
            raise ValueError("edit requires a non-empty edited_draft")
        return self


# --- Module Notes -----------------------------------------------------------
# The runner obtains a decision (CLI prompt or scripted list) and resumes the graph with
# `Command(resume=decision)`; the node validates it through this model.
