"""
Availability & scheduling engine.

Pure functions over materialized calendar data:

- ``check_availability``: who is free, tentative or busy for a window
- ``generate_candidates``: half-hour aligned windows over a search horizon
- ``score_slot``: heuristic desirability score with reasons
- ``propose_resolution_strategies``: ranked ways out of a conflict

``SchedulingEngine`` combines them; ``AvailabilityService`` adds the async
fetch of busy intervals from a caller-supplied source.
"""

from services.scheduling.exceptions import (  # noqa: F401
    EmptyParticipantSet,
    InvalidDuration,
    InvalidWindow,
    SchedulingValidationError,
    SourceError,
)
from services.scheduling.services import (  # noqa: F401
    AvailabilityService,
    BusyIntervalSource,
    SchedulingEngine,
    check_availability,
    generate_candidates,
    propose_resolution_strategies,
    score_slot,
)
from services.scheduling.settings import configure_logging, get_settings  # noqa: F401
