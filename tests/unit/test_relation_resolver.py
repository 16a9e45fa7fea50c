"""Unit tests for the relation resolver.

These tests verify:
- Attachers are turned towards and moved next to their support face
- Support faces are balanced by reserved length
- Unsatisfiable relations produce warnings
- Wall relations become wall constraints, door and window relations are inert
- A fitting never supports itself and mutual attachments merge once
"""

import random

import pytest

from furnisher.domain import (
    BoundingBox3D,
    Direction,
    Face,
    Facing,
    Fitting,
    FittingCatalog,
    FittingModel,
    FittingType,
    RelationResolver,
    SpatialRelation,
    WarningKind,
)


def make_fittings(catalog: FittingCatalog, *model_ids: str) -> list[Fitting]:
    return [Fitting(model) for model in catalog.resolve_models(model_ids)]


def add_model(
    catalog: FittingCatalog, model_id: str, fitting_type: FittingType, *dimensions: float
) -> None:
    catalog.add_fitting_model(FittingModel(model_id, fitting_type, BoundingBox3D(*dimensions)))


@pytest.fixture
def bench_catalog() -> FittingCatalog:
    """Benches whose seat faces attach to other benches' seat faces."""
    catalog = FittingCatalog()
    seat = catalog.add_face_type("seat")
    seat.add_relation(SpatialRelation(seat, 0.1))
    bench = catalog.add_fitting_type(
        FittingType("bench", [Face(Facing.BACK, seat), Face(Facing.FRONT, seat)])
    )
    add_model(catalog, "bench", bench, 1.0, 0.5, 0.45)
    return catalog


class TestAttachments:
    """Tests for fitting-to-fitting relations."""

    def test_lamp_stands_beside_sofa(
        self, living_room_catalog: FittingCatalog, rng: random.Random
    ) -> None:
        """The lamp is moved next to one of the sofa sides and merged."""
        sofa, lamp = make_fittings(living_room_catalog, "sofa", "lamp")
        result = RelationResolver(living_room_catalog, rng).resolve([sofa, lamp])

        assert result.attachment_count == 1
        assert result.warnings == []
        assert result.units == [sofa.placement_unit]
        assert sofa.placement_unit.members == [sofa, lamp]

        assert abs(lamp.position.x) == pytest.approx(1.0 + 0.05 + 0.15)
        assert lamp.position.y == pytest.approx(0.0)
        lamp_back = lamp.faces[0]
        expected = Direction.POSITIVE_X if lamp.position.x < 0 else Direction.NEGATIVE_X
        assert lamp_back.direction is expected

    def test_support_fitting_does_not_move(
        self, living_room_catalog: FittingCatalog, rng: random.Random
    ) -> None:
        """Only attachers move during layout."""
        table, chair = make_fittings(living_room_catalog, "table", "chair")
        RelationResolver(living_room_catalog, rng).resolve([table, chair])
        assert table.position.x == 0.0
        assert table.position.y == 0.0
        assert table.orientation == 0

    def test_chairs_spread_over_both_sides(
        self, living_room_catalog: FittingCatalog, rng: random.Random
    ) -> None:
        """The second chair goes to the less reserved side of the table."""
        table, first, second = make_fittings(living_room_catalog, "table", "chair", "chair")
        result = RelationResolver(living_room_catalog, rng).resolve([table, first, second])

        assert result.attachment_count == 2
        assert len(result.units) == 1
        assert sorted(chair.position.y for chair in (first, second)) == pytest.approx(
            [-0.65, 0.65]
        )
        for chair in (first, second):
            assert chair.position.x == pytest.approx(0.0)
            # Chair fronts face the table
            expected = Direction.NEGATIVE_Y if chair.position.y > 0 else Direction.POSITIVE_Y
            assert chair.faces[0].direction is expected

    def test_full_table_leaves_chair_unattached(
        self, living_room_catalog: FittingCatalog, rng: random.Random
    ) -> None:
        """Two chairs fit per table side; the fifth chair stays on its own."""
        fittings = make_fittings(living_room_catalog, "table", *["chair"] * 5)
        result = RelationResolver(living_room_catalog, rng).resolve(fittings)

        assert result.attachment_count == 4
        assert [w.kind for w in result.warnings] == [WarningKind.UNSATISFIED_RELATION]
        assert "'chair'" in result.warnings[0].message
        assert len(result.units) == 2
        assert result.units[0].members[0] is fittings[0]
        assert result.units[1].members == [fittings[-1]]

        seated = fittings[1:5]
        assert sorted(round(abs(chair.position.x), 4) for chair in seated) == [0.2667] * 4
        assert sum(1 for chair in seated if chair.position.y > 0) == 2

    def test_no_support_in_request_warns(
        self, living_room_catalog: FittingCatalog, rng: random.Random
    ) -> None:
        """A relation without any support face in the request is unsatisfied."""
        (lamp,) = make_fittings(living_room_catalog, "lamp")
        result = RelationResolver(living_room_catalog, rng).resolve([lamp])
        assert [w.kind for w in result.warnings] == [WarningKind.UNSATISFIED_RELATION]
        assert "None of the 1 fitting relations of 'lamp'" in result.warnings[0].message
        assert result.attachment_count == 0
        assert result.units == [lamp.placement_unit]

    def test_fitting_never_supports_itself(
        self, bench_catalog: FittingCatalog, rng: random.Random
    ) -> None:
        """A single bench cannot attach to its own seat faces."""
        (bench,) = make_fittings(bench_catalog, "bench")
        result = RelationResolver(bench_catalog, rng).resolve([bench])
        assert result.attachment_count == 0
        assert [w.kind for w in result.warnings] == [WarningKind.UNSATISFIED_RELATION]
        assert "None of the 2 fitting relations" in result.warnings[0].message

    def test_mutual_attachments_merge_once(
        self, bench_catalog: FittingCatalog, rng: random.Random
    ) -> None:
        """Two benches attached to each other form one unit, laid out once."""
        first, second = make_fittings(bench_catalog, "bench", "bench")
        result = RelationResolver(bench_catalog, rng).resolve([first, second])

        assert result.attachment_count == 2
        assert len(result.units) == 1
        assert result.units[0].members == [first, second]
        assert first.position.x == 0.0 and first.position.y == 0.0
        assert second.position.x == pytest.approx(0.0)
        assert abs(second.position.y) == pytest.approx(0.25 + 0.1 + 0.25)

    def test_same_seed_same_result(self, living_room_catalog: FittingCatalog) -> None:
        """Resolution depends only on the random source."""
        positions = []
        for _ in range(2):
            fittings = make_fittings(living_room_catalog, "sofa", "lamp", "lamp", "table", "chair")
            RelationResolver(living_room_catalog, random.Random(99)).resolve(fittings)
            positions.append([(f.position, f.orientation) for f in fittings])
        assert positions[0] == positions[1]


class TestWallRelations:
    """Tests for wall, door and window relations."""

    def test_wall_relation_becomes_constraint(
        self, living_room_catalog: FittingCatalog, rng: random.Random
    ) -> None:
        """The bookcase back is constrained to stand against a wall."""
        (bookcase,) = make_fittings(living_room_catalog, "bookcase")
        result = RelationResolver(living_room_catalog, rng).resolve([bookcase])

        assert result.wall_constraint_count == 1
        (constraint,) = bookcase.placement_unit.wall_constraints
        assert constraint.direction is Direction.POSITIVE_Y
        assert constraint.distance == pytest.approx(0.2)

    def test_wall_constraint_follows_attached_unit(
        self, living_room_catalog: FittingCatalog, rng: random.Random
    ) -> None:
        """Wall constraints are registered after layout, on the merged unit."""
        sofa, lamp = make_fittings(living_room_catalog, "sofa", "lamp")
        result = RelationResolver(living_room_catalog, rng).resolve([sofa, lamp])
        assert result.wall_constraint_count == 1
        assert lamp.placement_unit.wall_constraints == sofa.placement_unit.wall_constraints
        assert len(sofa.placement_unit.wall_constraints) == 1

    def test_one_wall_relation_per_fitting(self, rng: random.Random) -> None:
        """Only one of several wall relations of a fitting is registered."""
        catalog = FittingCatalog()
        flat = catalog.add_face_type("flat")
        flat.add_relation(SpatialRelation(catalog.wall_face_type, 0.0))
        panel = catalog.add_fitting_type(
            FittingType("panel", [Face(Facing.BACK, flat), Face(Facing.LEFT, flat)])
        )
        add_model(catalog, "panel", panel, 1.0, 0.1, 2.0)

        (fitting,) = make_fittings(catalog, "panel")
        result = RelationResolver(catalog, rng).resolve([fitting])
        assert result.wall_constraint_count == 1
        assert len(fitting.placement_unit.wall_constraints) == 1

    def test_door_and_window_relations_are_inert(self, rng: random.Random) -> None:
        """Relations to doors and windows neither constrain nor warn."""
        catalog = FittingCatalog()
        rug_edge = catalog.add_face_type("rug_edge")
        rug_edge.add_relation(SpatialRelation(catalog.door_face_type, 0.2))
        rug_edge.add_relation(SpatialRelation(catalog.window_face_type, 0.2))
        rug = catalog.add_fitting_type(FittingType("rug", [Face(Facing.FRONT, rug_edge)]))
        add_model(catalog, "rug", rug, 2.0, 1.4, 0.01)

        (fitting,) = make_fittings(catalog, "rug")
        result = RelationResolver(catalog, rng).resolve([fitting])
        assert result.wall_constraint_count == 0
        assert result.attachment_count == 0
        assert result.warnings == []
        assert fitting.placement_unit.wall_constraints == []
