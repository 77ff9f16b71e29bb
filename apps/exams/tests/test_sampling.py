from random import Random

from django.test import TestCase, override_settings

from apps.exams.service_utils.sampling import default_rng, sample_questions

from . import factories


class SampleQuestionsTests(TestCase):
    def setUp(self):
        self.skill_a = factories.create_skill("Arithmetic")
        self.skill_b = factories.create_skill("Reasoning")
        self.a_questions = factories.create_questions(self.skill_a, 3)
        self.b_questions = factories.create_questions(self.skill_b, 1)
        self.assessment = factories.create_assessment()
        factories.add_requirement(
            assessment=self.assessment, skill=self.skill_a, question_count=3, order=1
        )
        factories.add_requirement(
            assessment=self.assessment, skill=self.skill_b, question_count=2, order=2
        )

    def test_short_skill_contributes_everything_it_has(self):
        selected = sample_questions(self.assessment, rng=Random(1))

        self.assertEqual(self.assessment.max_questions, 5)
        self.assertEqual(len(selected), 4)
        self.assertEqual(len({question.pk for question in selected}), 4)

    def test_questions_grouped_in_requirement_order(self):
        selected = sample_questions(self.assessment, rng=Random(2))

        self.assertEqual({q.skill_id for q in selected[:3]}, {self.skill_a.pk})
        self.assertEqual([q.pk for q in selected[3:]], [self.b_questions[0].pk])

    def test_truncates_to_requested_count(self):
        factories.create_questions(self.skill_b, 4)
        selected = sample_questions(self.assessment, rng=Random(3))

        self.assertEqual(len(selected), 5)
        self.assertEqual(
            len([q for q in selected if q.skill_id == self.skill_b.pk]), 2
        )

    def test_same_seed_same_draw(self):
        factories.create_questions(self.skill_a, 5)
        first = [q.pk for q in sample_questions(self.assessment, rng=Random(42))]
        second = [q.pk for q in sample_questions(self.assessment, rng=Random(42))]
        self.assertEqual(first, second)

    def test_assessment_without_requirements(self):
        empty = factories.create_assessment()
        self.assertEqual(sample_questions(empty, rng=Random(0)), [])

    @override_settings(EXAM_SAMPLER_SEED=7)
    def test_configured_seed(self):
        self.assertEqual(default_rng().random(), Random(7).random())
