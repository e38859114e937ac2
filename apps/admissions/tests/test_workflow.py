from django.test import SimpleTestCase

from apps.admissions.workflow import (
    FORWARD_PATH,
    TERMINAL_STATES,
    TRANSITIONS,
    AdmissionStatus,
    allowed_targets,
    can_transition,
    is_terminal,
    next_status,
)


class TransitionTableTests(SimpleTestCase):
    def test_every_status_has_a_row(self):
        self.assertEqual(set(TRANSITIONS), set(AdmissionStatus))

    def test_only_successor_or_rejection_is_allowed(self):
        for current in AdmissionStatus:
            for target in AdmissionStatus:
                expected = not is_terminal(current) and target in (next_status(current), AdmissionStatus.REJECTED)
                with self.subTest(current=current, target=target):
                    self.assertEqual(can_transition(current, target), expected)

    def test_forward_path_is_single_step(self):
        for current, following in zip(FORWARD_PATH, FORWARD_PATH[1:]):
            self.assertEqual(next_status(current), following)
            self.assertTrue(can_transition(current, following))
        self.assertFalse(can_transition(AdmissionStatus.APPLIED, AdmissionStatus.TESTED))
        self.assertFalse(can_transition(AdmissionStatus.INQUIRY, AdmissionStatus.ENROLLED))

    def test_no_backward_moves(self):
        for index, current in enumerate(FORWARD_PATH):
            for earlier in FORWARD_PATH[:index + 1]:
                self.assertFalse(can_transition(current, earlier))

    def test_terminal_states(self):
        self.assertEqual(
            TERMINAL_STATES,
            {AdmissionStatus.ENROLLED, AdmissionStatus.REJECTED, AdmissionStatus.WITHDRAWN},
        )
        for status in TERMINAL_STATES:
            self.assertEqual(allowed_targets(status), frozenset())
            self.assertIsNone(next_status(status))

    def test_admitted_can_still_be_rejected(self):
        self.assertTrue(can_transition(AdmissionStatus.ADMITTED, AdmissionStatus.REJECTED))

    def test_withdrawn_is_never_a_target(self):
        for current in AdmissionStatus:
            self.assertFalse(can_transition(current, AdmissionStatus.WITHDRAWN))

    def test_unknown_status_is_never_legal(self):
        self.assertFalse(can_transition("archived", AdmissionStatus.APPLIED))
        self.assertEqual(allowed_targets("archived"), frozenset())
        self.assertIsNone(next_status("archived"))

    def test_plain_strings_match_enum_members(self):
        self.assertTrue(can_transition("tested", "interview_scheduled"))
