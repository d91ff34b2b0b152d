from typing import Any, Dict


def init_metrics() -> Dict[str, Any]:
    return {
        'rooms_placed': 0,
        'regions': 0,
        'connectors_opened': 0,
        'extra_connectors': 0,
        'connector_exhausted': False,
        'open_regions': 0,
        'tunnels_dug': 0,
        'dead_ends_removed': 0,
        'entrances_removed': 0,
        'entrances_restored': 0,
        'doors_none': 0,
        'doors_open': 0,
        'doors_closed': 0,
        'runtime_ms': 0,
        'phase_ms': {},
    }
