import pytest

from conftest import RecordingSink, run
from gridsearch.core.astar import AStarAlgo
from gridsearch.core.bfs import BFSAlgo
from gridsearch.core.dfs import DFSAlgo
from gridsearch.core.dijkstra import DijkstraAlgo
from gridsearch.core.errors import InvalidConfiguration
from gridsearch.core.grid import Grid
from gridsearch.core.maps import parse_diagram
from gridsearch.core.search import manhattan
from gridsearch.core.types import CellState, Transition

ALL = [BFSAlgo, DFSAlgo, DijkstraAlgo, AStarAlgo]
SHORTEST = [BFSAlgo, DijkstraAlgo, AStarAlgo]


def assert_connected(path, grid):
    for a, b in zip(path, path[1:]):
        assert manhattan(a, b) == 1
    assert all(not grid.is_wall(c) for c in path)


# ---------- scenarios ----------
@pytest.mark.parametrize("algo_cls", SHORTEST)
def test_open_grid_finds_manhattan_path(algo_cls, empty_5x5):
    res = run(algo_cls().run(empty_5x5, (0, 0), (4, 4)))
    assert res.found
    assert len(res.path) == 9
    assert res.path[0] == (0, 0) and res.path[-1] == (4, 4)
    assert_connected(res.path, empty_5x5)


@pytest.mark.parametrize("algo_cls", ALL)
def test_wall_row_blocks_every_strategy(algo_cls, walled_5x5):
    res = run(algo_cls().run(walled_5x5, (0, 0), (4, 4)))
    assert not res.found
    assert res.path == []
    # every reachable cell above the wall except the start
    assert res.nodes_visited == 9


@pytest.mark.parametrize("algo_cls", ALL)
def test_start_equals_end_is_trivial(algo_cls, recorder):
    grid = Grid(3, 3)
    res = run(algo_cls().run(grid, (1, 1), (1, 1), recorder))
    assert res.found
    assert res.path == [(1, 1)]
    assert res.nodes_visited == 1
    assert recorder.calls == []


# ---------- properties ----------
@pytest.mark.parametrize("algo_cls", SHORTEST)
@pytest.mark.parametrize("start, end", [((0, 0), (5, 7)), ((5, 0), (0, 7)), ((2, 3), (2, 4)), ((3, 7), (0, 0))])
def test_shortest_on_wall_free_grid(algo_cls, start, end):
    grid = Grid(6, 8)
    res = run(algo_cls().run(grid, start, end))
    assert res.found
    assert len(res.path) - 1 == manhattan(start, end)


@pytest.mark.parametrize("algo_cls", ALL)
def test_path_is_connected_around_walls(algo_cls):
    grid = parse_diagram("""
        S.#.....
        .##.###.
        ....#...
        .####.#.
        ......#E
    """)
    res = run(algo_cls().run(grid, grid.start, grid.end))
    assert res.found
    assert res.path[0] == grid.start and res.path[-1] == grid.end
    assert_connected(res.path, grid)


@pytest.mark.parametrize("algo_cls", SHORTEST)
def test_shortest_around_walls(algo_cls):
    grid = parse_diagram("""
        S...
        ###.
        E...
    """)
    res = run(algo_cls().run(grid, grid.start, grid.end))
    assert res.path == [(0, 0), (0, 1), (0, 2), (0, 3), (1, 3), (2, 3), (2, 2), (2, 1), (2, 0)]


@pytest.mark.parametrize("algo_cls", ALL)
def test_nodes_visited_counts_visited_transitions_plus_goal(algo_cls):
    grid = Grid(6, 6)
    for r in range(1, 6):
        grid.set_cell_state(r, 3, CellState.WALL)
    sink = RecordingSink()
    res = run(algo_cls().run(grid, (5, 0), (5, 5), sink))
    visited = sink.cells(CellState.VISITED)
    assert res.found
    assert len(visited) == len(set(visited))
    assert res.nodes_visited == len(visited) + 1


@pytest.mark.parametrize("algo_cls", ALL)
def test_walls_start_and_end_never_reported(algo_cls):
    grid = parse_diagram("""
        S..#....
        .#.#.##.
        .#...#..
        .####.#.
        ......#E
    """)
    walls = set(grid.walls())
    sink = RecordingSink()
    run(algo_cls().run(grid, grid.start, grid.end, sink))
    reported = {(t.row, t.col) for t in sink.calls}
    assert not reported & walls
    assert grid.start not in reported and grid.end not in reported
    assert grid.cell(*grid.start).state is CellState.START
    assert grid.cell(*grid.end).state is CellState.END


@pytest.mark.parametrize("algo_cls", ALL)
def test_path_reported_after_visits_in_start_to_end_order(algo_cls):
    grid = Grid(4, 6)
    sink = RecordingSink()
    res = run(algo_cls().run(grid, (0, 0), (3, 5), sink))
    states = [t.state for t in sink.calls]
    first_path = states.index(CellState.PATH)
    assert all(s is CellState.VISITED for s in states[:first_path])
    assert all(s is CellState.PATH for s in states[first_path:])
    assert sink.cells(CellState.PATH) == res.path[1:-1]
    assert all(t.algorithm == res.algorithm for t in sink.calls)


@pytest.mark.parametrize("algo_cls", ALL)
def test_grid_is_not_touched_ahead_of_the_sink(algo_cls):
    grid = Grid(5, 7)
    sink = RecordingSink(grid)
    run(algo_cls().run(grid, (0, 0), (4, 6), sink))
    visits = [n for t, n in zip(sink.calls, sink.snapshots) if t.state is CellState.VISITED]
    paths = [n for t, n in zip(sink.calls, sink.snapshots) if t.state is CellState.PATH]
    assert visits == list(range(1, len(visits) + 1))
    assert paths == list(range(1, len(paths) + 1))


@pytest.mark.parametrize("algo_cls", ALL)
def test_runs_are_deterministic(algo_cls):
    def once():
        grid = parse_diagram("""
            S.....
            .##.#.
            ....#E
        """)
        sink = RecordingSink()
        res = run(algo_cls().run(grid, grid.start, grid.end, sink))
        return res, sink.calls

    assert once() == once()


# ---------- exact orderings ----------
@pytest.mark.parametrize("algo_cls", [BFSAlgo, DijkstraAlgo, AStarAlgo])
def test_fifo_tie_break_on_2x2(algo_cls, recorder):
    grid = Grid(2, 2)
    res = run(algo_cls().run(grid, (0, 0), (1, 1), recorder))
    label = res.algorithm
    assert recorder.calls == [
        Transition(1, 0, CellState.VISITED, label),
        Transition(0, 1, CellState.VISITED, label),
        Transition(1, 0, CellState.PATH, label),
    ]
    assert res.nodes_visited == 3


def test_dfs_expands_most_recent_first(recorder):
    grid = Grid(2, 2)
    res = run(DFSAlgo().run(grid, (0, 0), (1, 1), recorder))
    assert res.path == [(0, 0), (0, 1), (1, 1)]
    assert recorder.calls[-1] == Transition(0, 1, CellState.PATH, "DFS")


def test_dfs_path_need_not_be_shortest():
    grid = Grid(3, 3)
    res = run(DFSAlgo().run(grid, (0, 0), (2, 0)))
    assert res.found
    assert res.path == [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2), (2, 1), (2, 0)]
    assert len(res.path) - 1 > manhattan((0, 0), (2, 0))
    assert res.nodes_visited == 8


def test_astar_stays_on_the_straight_line():
    grid = Grid(7, 7)
    astar = run(AStarAlgo().run(grid, (3, 0), (3, 6)))
    grid.reset_search_state()
    bfs = run(BFSAlgo().run(grid, (3, 0), (3, 6)))
    assert astar.nodes_visited == 18
    assert astar.nodes_visited < bfs.nodes_visited
    assert astar.path == bfs.path == [(3, c) for c in range(7)]


def test_astar_costs_written_to_cells():
    grid = Grid(3, 3)
    run(AStarAlgo().run(grid, (0, 0), (2, 2)))
    end = grid.cell(2, 2)
    assert end.g_cost == 4
    assert end.h_cost == 0
    assert end.f_cost == 4
    mid = grid.cell(0, 1)
    assert mid.f_cost == mid.g_cost + mid.h_cost


def test_dijkstra_g_costs_are_distances():
    grid = Grid(3, 4)
    run(DijkstraAlgo().run(grid, (0, 0), (2, 3)))
    for cell in grid.iter_cells():
        if cell.g_cost != float("inf"):
            assert cell.g_cost == manhattan((0, 0), cell.coord)


# ---------- stepping ----------
@pytest.mark.parametrize("algo_cls", ALL)
def test_step_matches_run(algo_cls, empty_5x5):
    algo = algo_cls()
    algo.init(empty_5x5)
    stepped = []
    counts = []
    while True:
        res = algo.step()
        if res.status != "running":
            break
        stepped.append(res.transition)
        counts.append(res.nodes_visited)
    assert res.status == "done"
    assert res.path[0] == (0, 0) and res.path[-1] == (4, 4)
    assert counts == sorted(counts)
    assert algo.step().status == "done"

    empty_5x5.reset_search_state()
    sink = RecordingSink()
    run(algo_cls().run(empty_5x5, (0, 0), (4, 4), sink))
    assert stepped == sink.calls


def test_step_reports_no_path(walled_5x5):
    algo = BFSAlgo()
    algo.init(walled_5x5)
    statuses = {algo.step().status for _ in range(20)}
    assert statuses == {"running", "no_path"}
    assert algo.step().metrics["nodes_visited"] == 9


def test_step_without_grid_is_idle():
    assert DijkstraAlgo().step().status == "idle"


def test_reset_restarts_from_seed(empty_5x5):
    algo = AStarAlgo()
    algo.init(empty_5x5)
    first = [algo.step().transition for _ in range(3)]
    algo.reset()
    assert algo.nodes_visited == 0
    assert [algo.step().transition for _ in range(3)] == first


# ---------- validation ----------
@pytest.mark.parametrize("algo_cls", ALL)
@pytest.mark.parametrize("start, end", [(None, (1, 1)), ((0, 0), None), ((0, 5), (1, 1)), ((0, 0), (-1, 0))])
def test_bad_endpoints_rejected(algo_cls, start, end):
    grid = Grid(3, 3)
    with pytest.raises(InvalidConfiguration):
        run(algo_cls().run(grid, start, end))


def test_wall_endpoint_rejected():
    grid = Grid(3, 3)
    grid.set_cell_state(2, 2, CellState.WALL)
    with pytest.raises(InvalidConfiguration, match="wall"):
        AStarAlgo().init(grid, (0, 0), (2, 2))
