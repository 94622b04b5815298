"""
Applies reviewer suggestions to daily itineraries.

Each suggestion is handled on its own: an unknown place, day or type is a
logged no-op and never discards the rest of the batch. REMOVE drops every
place with the given name; MOVE and SWAP act on the first match. Days touched
by at least one suggestion get their travel distance recomputed from the new
place order; untouched days are carried over unchanged.
"""

import logging
from typing import Dict, List, Optional, Set

from itinerary.shared.contracts.review_contract import ReviewVerdict, Suggestion
from itinerary.shared.geo import total_distance_km
from itinerary.shared.schemas.places import DailyItinerary, Place


logger = logging.getLogger(__name__)


def _index_of(places: List[Place], name: str) -> Optional[int]:
    """Position of the first place called ``name``."""
    for index, place in enumerate(places):
        if place.name == name:
            return index
    return None


def _action_note(suggestion: Suggestion) -> str:
    return f" | action={suggestion.action}" if suggestion.action else ""


class AdjustmentApplier:
    """Applies MOVE / REMOVE / SWAP suggestions."""

    def apply(
        self,
        itineraries: Dict[int, DailyItinerary],
        verdict: ReviewVerdict,
    ) -> Dict[int, DailyItinerary]:
        """
        Apply a verdict's suggestions.

        Args:
            itineraries: Day number -> itinerary (left untouched)
            verdict: Reviewer verdict

        Returns:
            A new mapping with the adjustments applied
        """
        if not verdict.needs_adjustment or not verdict.suggestions:
            return dict(itineraries)

        working: Dict[int, List[Place]] = {
            day: list(itinerary.places) for day, itinerary in itineraries.items()
        }
        touched: Set[int] = set()

        for suggestion in verdict.suggestions:
            handler = self._handlers.get(suggestion.type)
            if handler is None:
                logger.warning(f"Unknown suggestion type ignored: {suggestion.type}")
                continue
            if suggestion.day not in working:
                logger.warning(
                    f"{suggestion.type} ignored: day {suggestion.day} does not exist"
                )
                continue
            touched.update(handler(self, working, suggestion))

        adjusted = dict(itineraries)
        for day in sorted(touched):
            places = working[day]
            adjusted[day] = itineraries[day].model_copy(
                update={"places": places, "total_distance_km": total_distance_km(places)}
            )
            logger.info(
                f"Day {day} adjusted | places={len(places)}, "
                f"distance={adjusted[day].total_distance_km:.1f}km"
            )

        return adjusted

    def _move(self, working: Dict[int, List[Place]], suggestion: Suggestion) -> Set[int]:
        target = suggestion.target_day
        if target is None or target not in working:
            logger.warning(
                f"MOVE '{suggestion.place}' ignored: target day {target} does not exist"
            )
            return set()

        source = working[suggestion.day]
        index = _index_of(source, suggestion.place)
        if index is None:
            logger.warning(
                f"MOVE ignored: '{suggestion.place}' not found on day {suggestion.day}"
            )
            return set()

        place = source.pop(index)
        working[target].append(place.model_copy(update={"day": target}))
        logger.info(
            f"Moved '{place.name}' from day {suggestion.day} to day {target}"
            f"{_action_note(suggestion)}"
        )
        return {suggestion.day, target}

    def _remove(self, working: Dict[int, List[Place]], suggestion: Suggestion) -> Set[int]:
        places = working[suggestion.day]
        kept = [p for p in places if p.name != suggestion.place]
        if len(kept) == len(places):
            logger.warning(
                f"REMOVE ignored: '{suggestion.place}' not found on day {suggestion.day}"
            )
            return set()

        removed = len(places) - len(kept)
        working[suggestion.day] = kept
        logger.info(
            f"Removed '{suggestion.place}' from day {suggestion.day} (x{removed})"
            f"{_action_note(suggestion)}"
        )
        return {suggestion.day}

    def _swap(self, working: Dict[int, List[Place]], suggestion: Suggestion) -> Set[int]:
        places = working[suggestion.day]
        first = _index_of(places, suggestion.place)
        second = _index_of(places, suggestion.swap_with) if suggestion.swap_with else None
        if first is None or second is None:
            logger.warning(
                f"SWAP ignored on day {suggestion.day}: "
                f"'{suggestion.place}' / '{suggestion.swap_with}' not both found"
            )
            return set()

        places[first], places[second] = places[second], places[first]
        logger.info(
            f"Swapped '{suggestion.place}' and '{suggestion.swap_with}' on day {suggestion.day}"
            f"{_action_note(suggestion)}"
        )
        return {suggestion.day}

    _handlers = {
        "MOVE": _move,
        "REMOVE": _remove,
        "SWAP": _swap,
    }
