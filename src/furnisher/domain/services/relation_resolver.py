"""Resolve spatial relations between fittings into placement units.

For every fitting at most one fitting-to-fitting relation and at most one
wall relation is satisfied. Attached fittings are turned to face their support
face, moved to the required distance and merged into one placement unit.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from ..catalog import FaceType, FittingCatalog, SpatialRelation
from ..entities import Fitting, ParticularFace
from ..placement_unit import PlacementUnit
from ..value_objects import LayoutWarning, WarningKind

__all__ = ["RelationResolver", "ResolutionResult"]

logger = logging.getLogger(__name__)


@dataclass
class ResolutionResult:
    """Outcome of relation resolution.

    Attributes:
        units: Distinct placement units, ordered by their first member in
            fitting order.
        warnings: Relations that could not be satisfied.
        attachment_count: Number of fitting-to-fitting relations committed.
        wall_constraint_count: Number of wall relations registered.
    """

    units: list[PlacementUnit] = field(default_factory=list)
    warnings: list[LayoutWarning] = field(default_factory=list)
    attachment_count: int = 0
    wall_constraint_count: int = 0


@dataclass(frozen=True)
class _Attachment:
    attacher_face: ParticularFace
    support_face: ParticularFace
    relation: SpatialRelation


class RelationResolver:
    """Picks the relations to satisfy and builds placement units from them.

    Args:
        catalog: Catalog the fittings' models belong to. Its built-in face
            types tell wall relations apart from fitting relations.
        rng: Random source for every tie-break.
    """

    def __init__(self, catalog: FittingCatalog, rng: random.Random) -> None:
        self.catalog = catalog
        self.rng = rng

    def resolve(self, fittings: list[Fitting]) -> ResolutionResult:
        """Attach fittings to each other and to walls.

        Args:
            fittings: Freshly created fittings, in request order.

        Returns:
            The resulting placement units and any unsatisfied relations.
        """
        result = ResolutionResult()
        faces_by_type = self._index_faces(fittings)
        wall_relations: list[tuple[ParticularFace, SpatialRelation]] = []

        for fitting in fittings:
            candidates, wall_candidates, relation_count = self._collect_candidates(
                fitting, faces_by_type
            )

            if candidates:
                chosen = candidates[self.rng.randrange(len(candidates))]
                if chosen.support_face.attach_face(chosen.attacher_face, chosen.relation):
                    result.attachment_count += 1
                    logger.debug(
                        f"Attached {chosen.attacher_face!r} to {chosen.support_face!r} "
                        f"at distance {chosen.relation.distance}"
                    )
            elif relation_count > 0:
                message = (
                    f"None of the {relation_count} fitting relations of "
                    f"'{fitting.fitting_model.id}' can be satisfied"
                )
                logger.warning(message)
                result.warnings.append(
                    LayoutWarning(
                        kind=WarningKind.UNSATISFIED_RELATION,
                        message=message,
                        suggestion="Add more support fittings or reduce the number of attachers",
                    )
                )

            if wall_candidates:
                wall_relations.append(wall_candidates[self.rng.randrange(len(wall_candidates))])

        self._lay_out_attachments(fittings)

        for face, relation in wall_relations:
            face.fitting.placement_unit.add_wall_constraint(face, relation.distance)
            result.wall_constraint_count += 1
            logger.debug(f"Registered wall constraint for {face!r} at distance {relation.distance}")

        for fitting in fittings:
            if fitting.placement_unit not in result.units:
                result.units.append(fitting.placement_unit)

        logger.info(
            f"Resolved {len(fittings)} fittings into {len(result.units)} placement units "
            f"({result.attachment_count} attachments, "
            f"{result.wall_constraint_count} wall constraints)"
        )
        return result

    @staticmethod
    def _index_faces(fittings: list[Fitting]) -> dict[FaceType, list[ParticularFace]]:
        faces_by_type: dict[FaceType, list[ParticularFace]] = {}
        for fitting in fittings:
            for face in fitting.faces:
                faces_by_type.setdefault(face.face_type, []).append(face)
        return faces_by_type

    def _collect_candidates(
        self,
        fitting: Fitting,
        faces_by_type: dict[FaceType, list[ParticularFace]],
    ) -> tuple[list[_Attachment], list[tuple[ParticularFace, SpatialRelation]], int]:
        """Find the feasible relations of one fitting.

        Returns:
            Feasible fitting relations, wall relation candidates and the
            number of fitting relations, with or without a support face
            in the batch.
        """
        candidates: list[_Attachment] = []
        wall_candidates: list[tuple[ParticularFace, SpatialRelation]] = []
        relation_count = 0

        for face in fitting.faces:
            for relation in face.face_type.spatial_relations:
                support_type = relation.support_face_type
                if self.catalog.is_static_face_type(support_type):
                    # Door and window relations are recognized but not placed
                    if self.catalog.is_wall_face_type(support_type):
                        wall_candidates.append((face, relation))
                    continue

                relation_count += 1
                supports = [
                    support
                    for support in faces_by_type.get(support_type, [])
                    if support.fitting is not fitting
                ]
                if not supports:
                    continue

                support = self._pick_support_face(supports, face, relation)
                if support is not None:
                    candidates.append(_Attachment(face, support, relation))

        return candidates, wall_candidates, relation_count

    def _pick_support_face(
        self,
        supports: list[ParticularFace],
        attacher_face: ParticularFace,
        relation: SpatialRelation,
    ) -> ParticularFace | None:
        """Pick the least reserved support face, then the one with most free length."""
        least_reserved = self._scan(supports, lambda a, b: a.reserved_length < b.reserved_length)
        if least_reserved.can_attach_face(attacher_face, relation):
            return least_reserved

        most_free = self._scan(supports, lambda a, b: a.free_length > b.free_length)
        if most_free.can_attach_face(attacher_face, relation):
            return most_free
        return None

    def _scan(self, faces: list[ParticularFace], better) -> ParticularFace:
        """Scan faces from a random start, keeping the first best one found."""
        start = self.rng.randrange(len(faces))
        best = faces[start]
        for offset in range(1, len(faces)):
            face = faces[(start + offset) % len(faces)]
            if better(face, best):
                best = face
        return best

    def _lay_out_attachments(self, fittings: list[Fitting]) -> None:
        """Move attached fittings next to their supports and merge their units."""
        for fitting in fittings:
            for support_face in fitting.faces:
                for attacher_face, relation in support_face.attachments:
                    attacher_unit = attacher_face.fitting.placement_unit
                    support_unit = support_face.fitting.placement_unit
                    if attacher_unit is support_unit:
                        logger.debug(
                            f"{attacher_face!r} is already rigidly bound to {support_face!r}"
                        )
                        continue

                    attacher_face.rotate_to_face(support_face.direction)
                    attacher_face.translate_to_distance_from_face(relation.distance, support_face)
                    support_unit.absorb(attacher_unit)
