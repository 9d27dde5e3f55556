"""Property tests: counters, contiguous search and defragmentation.

Uses hypothesis to drive random sequences of placements and removals
through a small warehouse and checks that the cached counters at every
level always agree with the zones underneath them.
"""

from datetime import date

from hypothesis import given, settings, strategies as st

from warehouse_engine.core.errors import (
    InsufficientSpaceError,
    NoContiguousSpaceError,
    WarehouseError,
)
from warehouse_engine.core.models import StoredUnit
from warehouse_engine.grid import Warehouse

ROWS, COLUMNS, ZONES = 2, 2, 4

expiry_dates = st.one_of(
    st.none(), st.dates(min_value=date(2024, 1, 1), max_value=date(2024, 1, 10))
)
operations = st.lists(
    st.tuples(
        st.sampled_from(["add", "remove_qty", "remove_all", "organize"]),
        st.integers(min_value=1, max_value=3),
        st.integers(min_value=1, max_value=6),
        expiry_dates,
    ),
    max_size=25,
)
CAPACITY = ROWS * COLUMNS * ZONES
occupancy = st.lists(st.booleans(), min_size=CAPACITY, max_size=CAPACITY)


def _warehouse_with(occupied: list[bool]) -> Warehouse:
    warehouse = Warehouse.build(ROWS, COLUMNS, ZONES)
    for index, taken in enumerate(occupied):
        if taken:
            position = warehouse.flat_map_position_to_zone(index)
            warehouse.add_item(*position, StoredUnit.create(99, *position))
    return warehouse


def _has_run(warehouse: Warehouse, required: int) -> bool:
    for row in warehouse.rows:
        for column in row.columns:
            if "0" * required in column.flat_map():
                return True
    return False


@given(ops=operations)
@settings(max_examples=150)
def test_counters_match_zones_after_any_operation_sequence(ops):
    """Every level's capacity and available_space equal the recount."""
    warehouse = Warehouse.build(ROWS, COLUMNS, ZONES)
    for name, product_id, qty, expiry in ops:
        try:
            if name == "add":
                warehouse.add_items_by_qty(product_id, qty, expiry)
            elif name == "remove_qty":
                warehouse.remove_item_by_qty(product_id, qty)
            elif name == "remove_all":
                warehouse.remove_all_items(product_id)
            else:
                warehouse.organize_items_by_id(product_id)
        except WarehouseError:
            pass
        assert warehouse.check_invariants() == []
        assert warehouse.available_space == warehouse.flat_map().count("0")


@given(occupied=occupancy, required=st.integers(min_value=1, max_value=ZONES + 1))
@settings(max_examples=200)
def test_find_contiguous_space_matches_brute_force(occupied, required):
    """A run is reported exactly when some single column holds one."""
    warehouse = _warehouse_with(occupied)
    try:
        start = warehouse.find_contiguous_space(required)
    except InsufficientSpaceError:
        assert required > warehouse.available_space
        return
    except NoContiguousSpaceError:
        assert not _has_run(warehouse, required)
        return

    for offset in range(required):
        zone = warehouse.zone(start.row, start.column, start.zone + offset)
        assert zone is not None and zone.is_empty
    # First such run in scan order.
    column = warehouse.get_column(start.row, start.column)
    assert column.flat_map().find("0" * required) == start.zone - 1
    for row in warehouse.rows:
        for earlier in row.columns:
            if (row.row_number, earlier.column_number) >= (start.row, start.column):
                break
            assert "0" * required not in earlier.flat_map()


@given(occupied=occupancy, qty=st.integers(min_value=1, max_value=ZONES))
@settings(max_examples=150)
def test_new_product_lands_contiguously(occupied, qty):
    warehouse = _warehouse_with(occupied)
    try:
        placed = warehouse.add_items_by_qty(7, qty)
    except WarehouseError:
        assert not warehouse.contains_product(7)
        return
    assert len(placed) == qty
    assert warehouse.is_product_stored_contiguously(7)


@given(
    occupied=occupancy,
    scattered=st.lists(
        st.integers(min_value=0, max_value=CAPACITY - 1),
        min_size=2,
        max_size=4,
        unique=True,
    ),
    expiries=st.lists(expiry_dates, min_size=4, max_size=4),
    qty=st.integers(min_value=1, max_value=2),
)
@settings(max_examples=150)
def test_scattered_product_ends_contiguous_in_expiry_order(occupied, scattered, expiries, qty):
    """A successful add to a fragmented product leaves one run, oldest first."""
    warehouse = Warehouse.build(ROWS, COLUMNS, ZONES)
    for index, expiry in zip(scattered, expiries):
        position = warehouse.flat_map_position_to_zone(index)
        warehouse.add_item(*position, StoredUnit.create(7, *position, expiry))
    for index, taken in enumerate(occupied):
        position = warehouse.flat_map_position_to_zone(index)
        if taken and warehouse.get_zone(*position).is_empty:
            warehouse.add_item(*position, StoredUnit.create(99, *position))
    if warehouse.is_product_stored_contiguously(7):
        return

    try:
        warehouse.add_items_by_qty(7, qty)
    except (InsufficientSpaceError, NoContiguousSpaceError):
        assert warehouse.check_invariants() == []
        return

    positions = warehouse.find_all_item_occurrences(7)
    assert len(positions) == len(scattered) + qty
    assert warehouse.is_product_stored_contiguously(7)

    moved = positions[: len(scattered)]
    keys = [warehouse.get_item(*p).expiry_date for p in moved]
    dated = [key for key in keys if key is not None]
    assert dated == sorted(dated)
    assert keys[: len(dated)] == dated
