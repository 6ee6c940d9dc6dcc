import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from mazelab import (
    Grid,
    InvalidArgument,
    distance_map,
    generate_maze,
    save_maze,
    solve,
    solve_maze,
)
from mazelab.solver import main

from tests.helpers import detour_grid, open_grid, split_grid


def _assert_connected_steps(testcase: unittest.TestCase, grid: Grid, path) -> None:
    for a, b in zip(path, path[1:]):
        testcase.assertIn(b, grid.open_neighbors(a))


class SolveMazeTests(unittest.TestCase):
    def test_detour_uses_shortest_route(self) -> None:
        grid = detour_grid()
        path = solve_maze(grid, (0, 0), (0, 2))
        self.assertEqual(path, [(0, 0), (1, 0), (1, 1), (0, 1), (0, 2)])
        self.assertEqual(len(path) - 1, distance_map(grid, (0, 0))[0, 2])

    def test_open_grid_path_is_manhattan(self) -> None:
        grid = open_grid(4, 5)
        path = solve_maze(grid, (0, 0), (3, 4))
        self.assertEqual(len(path), 3 + 4 + 1)
        _assert_connected_steps(self, grid, path)

    def test_ties_prefer_up_right_down_left(self) -> None:
        grid = open_grid(2, 2)
        self.assertEqual(solve_maze(grid, (0, 0), (1, 1)), [(0, 0), (0, 1), (1, 1)])
        self.assertEqual(solve_maze(grid, (1, 1), (0, 0)), [(1, 1), (0, 1), (0, 0)])

    def test_disconnected_cells_have_no_path(self) -> None:
        grid = split_grid()
        self.assertEqual(solve_maze(grid, (0, 0), (1, 1)), [])
        self.assertEqual(solve_maze(grid, (0, 0), (0, 1)), [(0, 0), (0, 1)])

    def test_closed_grid_has_no_path(self) -> None:
        self.assertEqual(solve_maze(Grid(3, 3), (0, 0), (2, 2)), [])

    def test_start_equals_end(self) -> None:
        self.assertEqual(solve_maze(Grid(2, 2), (1, 1), (1, 1)), [(1, 1)])
        self.assertEqual(solve_maze(generate_maze(5, 5, seed=3), (2, 3), (2, 3)), [(2, 3)])

    def test_generated_maze_path_is_valid_and_shortest(self) -> None:
        grid = generate_maze(15, 11, seed=99)
        path = solve_maze(grid, (0, 0), (14, 10))
        self.assertEqual(path[0], (0, 0))
        self.assertEqual(path[-1], (14, 10))
        _assert_connected_steps(self, grid, path)
        self.assertEqual(len(set(path)), len(path))
        self.assertEqual(len(path) - 1, distance_map(grid, (0, 0))[14, 10])

    def test_reverse_query_gives_reverse_path_in_perfect_maze(self) -> None:
        grid = generate_maze(8, 8, seed=17)
        forward = solve_maze(grid, (0, 7), (7, 0))
        backward = solve_maze(grid, (7, 0), (0, 7))
        self.assertEqual(forward, list(reversed(backward)))

    def test_rejects_out_of_bounds_positions(self) -> None:
        grid = Grid(3, 3)
        for start, end in (((-1, 0), (0, 0)), ((0, 0), (3, 0)), ((0, 0), (0, 3))):
            with self.subTest(start=start, end=end):
                with self.assertRaises(InvalidArgument):
                    solve_maze(grid, start, end)

    def test_rejects_fractional_positions(self) -> None:
        grid = open_grid(2, 2)
        for start in ((0.9, 0), (0, 1.0), (True, 0), ("0", "0")):
            with self.subTest(start=start):
                with self.assertRaises(InvalidArgument):
                    solve_maze(grid, start, (0, 0))

    def test_accepts_list_positions(self) -> None:
        self.assertEqual(solve_maze(open_grid(1, 2), [0, 0], [0, 1]), [(0, 0), (0, 1)])


class DistanceMapTests(unittest.TestCase):
    def test_unreachable_cells_are_negative(self) -> None:
        distances = distance_map(split_grid(), (0, 0))
        self.assertEqual(distances.tolist(), [[0, 1], [-1, -1]])

    def test_open_grid_distances(self) -> None:
        distances = distance_map(open_grid(2, 3), (0, 0))
        self.assertEqual(distances.tolist(), [[0, 1, 2], [1, 2, 3]])


class SolveResultTests(unittest.TestCase):
    def test_to_dict(self) -> None:
        result = solve(detour_grid(), (0, 0), (0, 2))
        payload = result.to_dict()
        self.assertTrue(payload["solved"])
        self.assertEqual(payload["length"], 5)
        self.assertEqual(payload["path"][0], [0, 0])
        self.assertEqual(payload["end"], [0, 2])

    def test_unsolved_result(self) -> None:
        result = solve(split_grid(), (0, 0), (1, 0))
        self.assertFalse(result.solved)
        self.assertEqual(result.length, 0)


class SolverCliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.grid = generate_maze(4, 6, seed=5)
        self.maze_path = save_maze(self.grid, self.root / "maze_4x6.txt")

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def _run(self, *argv: str):
        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            status = main([str(self.maze_path), *argv])
        return status, buffer.getvalue()

    def test_json_output_defaults_to_corners(self) -> None:
        status, output = self._run("--json")
        self.assertEqual(status, 0)
        payload = json.loads(output)
        self.assertEqual(payload["start"], [0, 0])
        self.assertEqual(payload["end"], [3, 5])
        self.assertEqual(
            [tuple(cell) for cell in payload["path"]],
            solve_maze(self.grid, (0, 0), (3, 5)),
        )

    def test_show_prints_markers(self) -> None:
        status, output = self._run("--start", "0", "0", "--end", "3", "5", "--show")
        self.assertEqual(status, 0)
        self.assertIn("Solution path length:", output)
        self.assertIn(" S ", output)
        self.assertIn(" E ", output)

    def test_image_output(self) -> None:
        image_path = self.root / "out" / "solved.png"
        status, _ = self._run("--image", str(image_path), "--cell-size", "12")
        self.assertEqual(status, 0)
        self.assertTrue(image_path.exists())

    def test_unknown_image_extension_fails(self) -> None:
        image_path = self.root / "solved.xyz"
        status, output = self._run("--image", str(image_path))
        self.assertEqual(status, 1)
        self.assertEqual(output, "")
        self.assertFalse(image_path.exists())

    def test_unwritable_image_path_fails(self) -> None:
        blocker = self.root / "blocker"
        blocker.write_text("", encoding="utf-8")
        status, _ = self._run("--image", str(blocker / "solved.png"))
        self.assertEqual(status, 1)

    def test_tiny_image_cells_fail(self) -> None:
        status, _ = self._run("--image", str(self.root / "solved.png"), "--cell-size", "2")
        self.assertEqual(status, 1)

    def test_out_of_bounds_end_fails(self) -> None:
        status, output = self._run("--end", "9", "9")
        self.assertEqual(status, 1)
        self.assertEqual(output, "")

    def test_no_solution_message(self) -> None:
        save_maze(split_grid(), self.maze_path)
        status, output = self._run("--end", "1", "0")
        self.assertEqual(status, 0)
        self.assertIn("No solution exists from (0,0) to (1,0).", output)

    def test_malformed_file_fails(self) -> None:
        self.maze_path.write_text("3 3\n1 1 1\n", encoding="utf-8")
        status, _ = self._run()
        self.assertEqual(status, 1)


if __name__ == "__main__":
    unittest.main()
