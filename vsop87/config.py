"""
Process-wide settings: where to look for VSOP87 term tables and which series
evaluator to use. Defaults come from the environment:

- `VSOP87_DATA_DIR`: directory with JSON term tables and/or the raw VSOP87 files.
- `VSOP87_EVALUATOR`: one of `auto`, `vector`, `scalar`.
"""
import os

EVALUATOR_MODES = ('auto', 'vector', 'scalar')

def _mode_from_env():
    mode = os.environ.get('VSOP87_EVALUATOR', 'auto').strip().lower()
    if mode not in EVALUATOR_MODES:
        raise ValueError(f'VSOP87_EVALUATOR must be one of {EVALUATOR_MODES}, got {mode!r}')
    return mode

_data_dir = os.environ.get('VSOP87_DATA_DIR') or None
_evaluator_mode = _mode_from_env()

def get_data_dir():
    """
    Returns the configured term table directory or None.
    """
    return _data_dir

def set_data_dir(path):
    """
    Sets the term table directory. Only affects stores created afterwards:
    call `vsop87.terms.reset_default_store()` to reload the default store.
    """
    global _data_dir
    _data_dir = os.fspath(path) if path is not None else None

def get_evaluator_mode() -> str:
    return _evaluator_mode

def set_evaluator_mode(mode: str):
    """
    `auto` uses the vector path when the CPU probe succeeds, `vector` and `scalar`
    force one path.
    """
    global _evaluator_mode
    if mode not in EVALUATOR_MODES:
        raise ValueError(f'Evaluator mode must be one of {EVALUATOR_MODES}, got {mode!r}')
    _evaluator_mode = mode
