from datetime import date

from django.test import SimpleTestCase

from algorithms.availability.recurrence_materializer import (
    SOURCE_RECURRENCE,
    AvailabilityRecord,
    RecurrenceExpansion,
    RecurrenceRule,
    add_one_year,
    materialization_window,
    materialize_recurrences,
    to_schema_weekday,
)

# 2025-03-04 is a Tuesday
TUESDAY = date(2025, 3, 4)


def tuesday_rule(rule_id="r1", participant_id=1, name="Alice", **kwargs):
    kwargs.setdefault("start_date", TUESDAY)
    return RecurrenceRule(rule_id, participant_id, name, 2, **kwargs)


class HelpersTest(SimpleTestCase):
    def test_schema_weekday(self):
        self.assertEqual(to_schema_weekday(date(2025, 3, 2)), 0)  # Sunday
        self.assertEqual(to_schema_weekday(TUESDAY), 2)
        self.assertEqual(to_schema_weekday(date(2025, 3, 8)), 6)  # Saturday

    def test_add_one_year(self):
        self.assertEqual(add_one_year(date(2025, 3, 4)), date(2026, 3, 4))
        self.assertEqual(add_one_year(date(2024, 2, 29)), date(2025, 2, 28))

    def test_invalid_day_of_week(self):
        with self.assertRaises(ValueError):
            RecurrenceRule("r", 1, "Alice", 7, TUESDAY)

    def test_window(self):
        rules = [
            tuesday_rule(start_date=date(2025, 1, 7), end_date=date(2025, 2, 25)),
            tuesday_rule(start_date=date(2025, 3, 4), end_date=date(2025, 6, 24)),
        ]
        self.assertEqual(
            materialization_window(rules, today=date(2025, 1, 1)),
            (date(2025, 1, 7), date(2025, 6, 24)),
        )

    def test_open_ended_window(self):
        rules = [tuesday_rule(start_date=date(2025, 1, 7))]
        self.assertEqual(
            materialization_window(rules, today=date(2024, 2, 29)),
            (date(2025, 1, 7), date(2025, 2, 28)),
        )
        self.assertIsNone(materialization_window([], today=TUESDAY))


class RecurrenceExpansionTest(SimpleTestCase):
    """Test the recurrence expansion"""

    def test_weekly_occurrences_with_bounds_and_exceptions(self):
        rule = tuesday_rule(
            end_date=date(2025, 3, 25),
            start_time="18:00",
            end_time="22:00",
            note="rehearsal",
            excluded_dates=[date(2025, 3, 11)],
        )

        records = materialize_recurrences([rule], [], today=TUESDAY)

        self.assertEqual(
            [r.date for r in records],
            [date(2025, 3, 4), date(2025, 3, 18), date(2025, 3, 25)],
        )
        for record in records:
            self.assertEqual(record.source, SOURCE_RECURRENCE)
            self.assertEqual((record.start_time, record.end_time), ("18:00", "22:00"))
            self.assertEqual(record.note, "rehearsal")

    def test_manual_entry_suppresses_occurrence(self):
        rule = tuesday_rule(end_date=date(2025, 3, 18))
        manual = [AvailabilityRecord(1, "Alice", date(2025, 3, 11), "08:00", "09:00")]

        records = materialize_recurrences([rule], manual, today=TUESDAY)

        self.assertEqual([r.date for r in records], [date(2025, 3, 4), date(2025, 3, 18)])

    def test_manual_entry_of_other_participant_does_not_suppress(self):
        rule = tuesday_rule(end_date=TUESDAY)
        manual = [AvailabilityRecord(2, "Bob", TUESDAY)]

        self.assertEqual(len(materialize_recurrences([rule], manual, today=TUESDAY)), 1)

    def test_at_most_one_occurrence_per_participant_and_date(self):
        """Overlapping rules of one participant: the earliest-starting rule wins"""
        late = tuesday_rule("late", start_date=date(2025, 3, 11), end_date=date(2025, 3, 18), note="late")
        early = tuesday_rule("early", start_date=TUESDAY, end_date=date(2025, 3, 11), note="early")

        records = materialize_recurrences([late, early], [], today=TUESDAY)

        self.assertEqual(
            [(r.date, r.note) for r in records],
            [(date(2025, 3, 4), "early"), (date(2025, 3, 11), "early"), (date(2025, 3, 18), "late")],
        )

    def test_expansion_is_restartable(self):
        expansion = RecurrenceExpansion(
            [tuesday_rule(end_date=date(2025, 4, 1))], (TUESDAY, date(2025, 4, 1))
        )

        first = list(expansion)
        second = list(expansion)

        self.assertEqual(len(first), 5)
        self.assertEqual(first, second)
        self.assertTrue(all(day == record.date for day, record in first))

    def test_explicit_window_bounds_expansion(self):
        rule = tuesday_rule(start_date=date(2020, 1, 7))

        records = materialize_recurrences(
            [rule], [], today=TUESDAY, window=(date(2025, 3, 1), date(2025, 3, 31))
        )

        self.assertEqual(len(records), 4)

    def test_no_rules(self):
        self.assertEqual(materialize_recurrences([], [], today=TUESDAY), [])
        self.assertEqual(list(RecurrenceExpansion([], None)), [])
