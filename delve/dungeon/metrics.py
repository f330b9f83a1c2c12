from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'areas': 0,
        'candidate_passages': 0,
        'passages': 0,
        'passages_pruned': 0,
        'passage_cells': 0,
        'tiles_floor': 0,
        'tiles_wall': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
