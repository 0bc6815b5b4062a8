from services.scheduling.services.availability_service import (  # noqa: F401
    AvailabilityService,
    BusyIntervalSource,
)
from services.scheduling.services.conflict_detector import (  # noqa: F401
    ConflictDensityMap,
    check_availability,
    conflict_density,
    overlaps,
)
from services.scheduling.services.resolution_strategist import (  # noqa: F401
    build_recommendations,
    calculate_conflict_risk,
    propose_resolution_strategies,
)
from services.scheduling.services.scheduling_engine import (  # noqa: F401
    SchedulingEngine,
    analyze_rescheduling_impact,
)
from services.scheduling.services.slot_generator import generate_candidates  # noqa: F401
from services.scheduling.services.slot_scorer import (  # noqa: F401
    DEFAULT_WEIGHTS,
    ScoringWeights,
    calculate_confidence,
    rank_slots,
    score_slot,
)
