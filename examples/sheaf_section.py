"""
Example: global sections of a sheaf on a single edge.

Stalks R^1 on v0, R^2 on v1 and e01, with restriction maps
v0 -> e01 = [[1], [2]] and v1 -> e01 = 2 * I.
"""

import numpy as np
from cova import Sheaf, Simplex, SimplicialComplex


def main():
    v0, v1 = Simplex(0, [0]), Simplex(0, [1])
    e01 = Simplex(1, [0, 1])

    cx = SimplicialComplex()
    cx.join_element(e01)

    sheaf = Sheaf(cx, {
        (v0, e01): np.array([[1.0], [2.0]]),
        (v1, e01): np.array([[2.0, 0.0], [0.0, 2.0]]),
    })

    good = {v0: [2.0], v1: [1.0, 2.0], e01: [2.0, 4.0]}
    bad = {v0: [2.0], v1: [1.0, 2.0], e01: [2.0, 5.0]}

    print(f"{sheaf}")
    print(f"Consistent assignment is a section: {sheaf.is_global_section(good)}")
    print(f"Perturbed assignment is a section:  {sheaf.is_global_section(bad)}")

    print("\nCoboundary delta_0:")
    print(sheaf.coboundary(0))

    print(f"\ndim H^0 = {sheaf.cohomology(0)}")
    print(f"dim H^1 = {sheaf.cohomology(1)}")


if __name__ == "__main__":
    main()
