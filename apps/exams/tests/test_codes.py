import string

from django.test import SimpleTestCase, override_settings

from apps.exams.exceptions import Conflict
from apps.exams.service_utils.codes import generate_code, generate_unique_codes

ALLOWED = set(string.ascii_uppercase + string.digits)


class AccessCodeTests(SimpleTestCase):
    def test_code_uses_configured_length_and_alphabet(self):
        code = generate_code()
        self.assertEqual(len(code), 6)
        self.assertTrue(set(code) <= ALLOWED)

    def test_explicit_length(self):
        self.assertEqual(len(generate_code(10)), 10)

    def test_unique_codes_are_distinct(self):
        codes = generate_unique_codes(50)
        self.assertEqual(len(codes), 50)
        self.assertEqual(len(set(codes)), 50)

    def test_taken_codes_are_avoided(self):
        with override_settings(EXAM_ACCESS_CODE_LENGTH=1, EXAM_ACCESS_CODE_ALPHABET="AB"):
            self.assertEqual(generate_unique_codes(1, taken={"A"}), ["B"])

    @override_settings(
        EXAM_ACCESS_CODE_LENGTH=1,
        EXAM_ACCESS_CODE_ALPHABET="AB",
        EXAM_ACCESS_CODE_MAX_ATTEMPTS=20,
    )
    def test_exhausted_space_raises_conflict(self):
        with self.assertRaises(Conflict):
            generate_unique_codes(3)

    def test_zero_codes(self):
        self.assertEqual(generate_unique_codes(0), [])
