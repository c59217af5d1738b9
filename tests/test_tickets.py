from __future__ import annotations

import json
import random
import unittest

from tambola.tickets import (
    COLUMNS,
    ROWS,
    Ticket,
    TicketGenerator,
    clamp_ticket_count,
    column_range,
    generate_tickets,
)


def _valid_grid() -> tuple[tuple[int | None, ...], ...]:
    return (
        (1, None, 21, None, 41, None, 61, None, 81),
        (None, 11, None, 31, 42, 51, None, 71, None),
        (2, 12, None, None, None, 52, 62, None, 90),
    )


class ColumnRangeTests(unittest.TestCase):
    def test_ranges_cover_one_to_ninety(self) -> None:
        self.assertEqual(column_range(0), (1, 10))
        self.assertEqual(column_range(4), (41, 50))
        self.assertEqual(column_range(8), (81, 90))

    def test_out_of_range_column_raises(self) -> None:
        with self.assertRaises(ValueError):
            column_range(9)


class TicketModelTests(unittest.TestCase):
    def test_valid_ticket_has_no_violations(self) -> None:
        ticket = Ticket(id="TKT-1", grid=_valid_grid())
        self.assertEqual(ticket.layout_violations(), [])
        self.assertTrue(ticket.is_valid(require_every_column=True))
        self.assertEqual(len(ticket.numbers), 15)
        self.assertEqual(ticket.column_counts, [2, 2, 1, 1, 2, 2, 2, 1, 2])

    def test_grid_shape_is_enforced(self) -> None:
        with self.assertRaises(ValueError):
            Ticket(id="bad", grid=((None,) * COLUMNS,) * 2)

    def test_violations_are_reported(self) -> None:
        grid = [list(row) for row in _valid_grid()]
        grid[0][0], grid[2][0] = 2, 1  # descending column
        grid[1][1] = 5  # wrong column range
        ticket = Ticket(id="bad", grid=grid)
        problems = ticket.layout_violations()
        self.assertIn("column 0 is not ascending top to bottom", problems)
        self.assertIn("column 1 holds 5 outside 11..20", problems)

    def test_row_count_and_empty_column_reported(self) -> None:
        grid = [list(row) for row in _valid_grid()]
        grid[0][2] = None
        ticket = Ticket(id="short", grid=grid)
        problems = ticket.layout_violations(require_every_column=True)
        self.assertIn("row 0 has 4 numbers (must be 5)", problems)
        self.assertIn("ticket has 14 numbers (must be 15)", problems)
        self.assertIn("column 2 is empty", problems)

    def test_marking_is_independent_of_grid(self) -> None:
        ticket = Ticket(id="TKT-1", grid=_valid_grid())
        ticket.mark(5)
        ticket.mark(41)
        self.assertEqual(ticket.marked_numbers, {5, 41})
        self.assertFalse(ticket.is_marked(5))
        self.assertTrue(ticket.is_marked(41))
        self.assertEqual(ticket.matched_numbers, frozenset({41}))
        ticket.clear_marks()
        self.assertEqual(ticket.marked_numbers, set())

    def test_mark_rejects_invalid_numbers(self) -> None:
        ticket = Ticket(id="TKT-1", grid=_valid_grid())
        with self.assertRaises(ValueError):
            ticket.mark(91)
        with self.assertRaises(TypeError):
            ticket.mark("7")  # type: ignore[arg-type]

    def test_to_json_and_str(self) -> None:
        ticket = Ticket(id="TKT-1", grid=_valid_grid())
        ticket.mark(90)
        ticket.mark(1)
        d = ticket.to_json()
        self.assertEqual(d["id"], "TKT-1")
        self.assertEqual(d["grid"][0][0], 1)
        self.assertIsNone(d["grid"][0][1])
        self.assertEqual(d["marked_numbers"], [1, 90])
        self.assertEqual(json.loads(ticket.to_json_str()), d)


class TicketGeneratorTests(unittest.TestCase):
    def test_generated_tickets_satisfy_layout(self) -> None:
        generator = TicketGenerator(random.Random(7))
        for ticket in generator.generate(12) + generator.generate(12):
            self.assertEqual(ticket.layout_violations(), [], ticket.grid)
            self.assertEqual(ticket.marked_numbers, set())
            filled = [cell for row in ticket.grid for cell in row if cell is not None]
            self.assertEqual(len(filled), 15)
            self.assertEqual(len(set(filled)), 15)
            for row in ticket.grid:
                self.assertEqual(sum(1 for cell in row if cell is not None), 5)
            for c in range(COLUMNS):
                low, high = column_range(c)
                values = [v for v in ticket.column(c) if v is not None]
                self.assertTrue(all(low <= v <= high for v in values))
                self.assertEqual(values, sorted(set(values)))

    def test_batch_ids_are_unique(self) -> None:
        generator = TicketGenerator(random.Random(3))
        for _ in range(50):
            tickets = generator.generate(12)
            self.assertEqual(len(tickets), 12)
            self.assertEqual(len({t.id for t in tickets}), 12)
            self.assertTrue(all(t.id.startswith("TKT-") for t in tickets))

    def test_seeded_generators_produce_same_grids(self) -> None:
        first = TicketGenerator(random.Random(42), layout="row_sample").generate(5)
        second = TicketGenerator(random.Random(42), layout="row_sample").generate(5)
        self.assertEqual([t.grid for t in first], [t.grid for t in second])

    def test_tickets_in_a_batch_differ(self) -> None:
        tickets = TicketGenerator(random.Random(11)).generate(12)
        self.assertGreater(len({t.grid for t in tickets}), 1)

    def test_row_sample_can_leave_a_column_empty(self) -> None:
        generator = TicketGenerator(random.Random(5), layout="row_sample")
        tickets = generator.generate(200)
        self.assertTrue(any(0 in t.column_counts for t in tickets))
        self.assertTrue(all(t.is_valid() for t in tickets))

    def test_column_cover_fills_every_column(self) -> None:
        generator = TicketGenerator(random.Random(5), layout="column_cover")
        for ticket in generator.generate(200):
            self.assertTrue(ticket.is_valid(require_every_column=True), ticket.grid)
            self.assertTrue(all(1 <= n <= ROWS for n in ticket.column_counts))

    def test_count_below_one_raises(self) -> None:
        with self.assertRaises(ValueError):
            TicketGenerator(random.Random(1)).generate(0)

    def test_unknown_layout_raises(self) -> None:
        with self.assertRaises(KeyError):
            TicketGenerator(random.Random(1), layout="missing")

    def test_generate_tickets_helper(self) -> None:
        tickets = generate_tickets(3, rng=random.Random(9), layout="column_cover")
        self.assertEqual(len(tickets), 3)


class ClampTicketCountTests(unittest.TestCase):
    def test_clamps_to_bounds(self) -> None:
        self.assertEqual(clamp_ticket_count(0, maximum=12), 1)
        self.assertEqual(clamp_ticket_count(-4, maximum=12), 1)
        self.assertEqual(clamp_ticket_count(7, maximum=12), 7)
        self.assertEqual(clamp_ticket_count(40, maximum=12), 12)

    def test_unparseable_input_becomes_one(self) -> None:
        self.assertEqual(clamp_ticket_count("", maximum=12), 1)
        self.assertEqual(clamp_ticket_count(None, maximum=12), 1)
        self.assertEqual(clamp_ticket_count("5", maximum=12), 5)
        self.assertEqual(clamp_ticket_count("abc", maximum=12), 1)

    def test_strings_read_up_to_leading_integer(self) -> None:
        self.assertEqual(clamp_ticket_count("5.7", maximum=12), 5)
        self.assertEqual(clamp_ticket_count("12abc", maximum=12), 12)
        self.assertEqual(clamp_ticket_count("  3 tickets", maximum=12), 3)
        self.assertEqual(clamp_ticket_count("40", maximum=12), 12)
        self.assertEqual(clamp_ticket_count("-2", maximum=12), 1)
        self.assertEqual(clamp_ticket_count(4.9, maximum=12), 4)


if __name__ == "__main__":
    unittest.main()
