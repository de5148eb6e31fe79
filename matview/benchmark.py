# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Timing harness: matview factorizations against their numpy counterparts.

    python -m matview.benchmark
"""

import time

import numpy as np
import pandas as pd

from .eigen import schur_decomposition
from .matrix import Matrix
from .qr import householder_qr
from .svd import bidiagonal_svd

REPEATS = 5  # best of 5 runs leads to stable numbers
SIZES = [(20, 20), (60, 40), (100, 100)]
COLUMNS = ["kernel", "size", "sec", "sec/NumPy", "error"]


def wall(f, *args, **kwargs):
    t0 = time.perf_counter()
    f(*args, **kwargs)
    return time.perf_counter() - t0


def best_of(repeats, f, *args, **kwargs):
    return min(wall(f, *args, **kwargs) for _ in range(repeats))


def run_benchmark(sizes=SIZES, repeats=REPEATS, seed=0) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    records = []

    for m, n in sizes:
        A = Matrix(rng.standard_normal((m, n)))
        dense = A.to_numpy()

        # ---------- Householder QR ---------------------------------
        t_np = best_of(repeats, np.linalg.qr, dense)
        t_hh = best_of(repeats, householder_qr, A)
        Q, R = householder_qr(A)
        err = np.linalg.norm((Q @ R).to_numpy() - dense, np.inf)
        records.append(("HH-QR", f"{m}×{n}", t_hh, t_hh / t_np, err))

        if m != n:
            continue

        # ---------- Schur form of a symmetric matrix ----------------
        sym = Matrix(dense + dense.T)
        t_np = best_of(repeats, np.linalg.eigvalsh, sym.to_numpy())
        t_schur = best_of(repeats, schur_decomposition, sym)
        T = schur_decomposition(sym)
        err = np.linalg.norm(
            np.sort(np.diag(T.to_numpy())) - np.linalg.eigvalsh(sym.to_numpy()),
            np.inf,
        )
        records.append(("Schur-QR", f"{m}×{n}", t_schur, t_schur / t_np, err))

        # ---------- bidiagonal SVD ----------------------------------
        bidiag = Matrix(np.diag(dense.diagonal()) + np.diag(dense.diagonal(1), 1))
        t_np = best_of(repeats, np.linalg.svd, bidiag.to_numpy())
        t_svd = best_of(repeats, bidiagonal_svd, bidiag)
        U, S, VT = bidiagonal_svd(bidiag)
        err = np.linalg.norm((U @ S @ VT).to_numpy() - bidiag.to_numpy(), np.inf)
        records.append(("Bidiag-SVD", f"{m}×{n}", t_svd, t_svd / t_np, err))

    return pd.DataFrame(records, columns=COLUMNS)


def main():
    df = run_benchmark()
    print(df.to_string(index=False))
    df.to_csv("bench_results.csv", index=False)


if __name__ == "__main__":
    main()
