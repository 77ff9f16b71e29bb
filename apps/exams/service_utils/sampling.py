"""Random per-skill question selection for an assessment."""

from __future__ import annotations

from random import Random, SystemRandom
from typing import List

from django.conf import settings

from ..models import Assessment, Question


def default_rng() -> Random:
    """Random source used when the caller does not supply one.

    ``EXAM_SAMPLER_SEED`` pins the draw for demos and test environments.
    """

    seed = getattr(settings, "EXAM_SAMPLER_SEED", None)
    if seed is not None:
        return Random(seed)
    return SystemRandom()


def sample_questions(assessment: Assessment, *, rng: Random | None = None) -> List[Question]:
    """Draw ``question_count`` random questions per requirement, in requirement order.

    A skill with fewer questions than requested contributes all of them, so
    the result may be shorter than ``assessment.max_questions``.
    """

    rng = rng or default_rng()
    selected: List[Question] = []
    requirements = assessment.requirements.select_related("skill").order_by("order", "id")
    for requirement in requirements:
        pool = list(Question.objects.filter(skill_id=requirement.skill_id).order_by("id"))
        rng.shuffle(pool)
        selected.extend(pool[: requirement.question_count])
    return selected


__all__ = ["default_rng", "sample_questions"]
