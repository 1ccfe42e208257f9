"""
cova Configuration
==================
Numeric defaults for row reduction, sheaf section checks and filtration
construction. Single source of truth; every consumer also accepts an
explicit keyword argument that wins over the value here.

Usage:
    from cova.config import CONFIG
    tol = CONFIG['linalg']['real_tolerance']
"""

CONFIG = {

    # =================================================================
    # Row reduction over floating-point fields
    # =================================================================
    'linalg': {
        # |x| <= real_tolerance is treated as an exact zero
        'real_tolerance': 1e-9,
    },

    # =================================================================
    # Sheaf global-section checks
    # =================================================================
    'sheaf': {
        # absolute tolerance for R @ x_parent == x_child over the reals
        'section_tolerance': 1e-9,
    },

    # =================================================================
    # Vietoris-Rips construction
    # =================================================================
    'filtration': {
        'max_workers': None,     # executor default (cpu count based)
        'max_dimension': None,   # None = full flag complex
    },
}
