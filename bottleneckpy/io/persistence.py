"""
Reading persistence intervals from text files.

Each non-comment line holds 2, 3 or 4 whitespace separated numbers:
- "birth death"
- "dimension birth death"
- "field dimension birth death"
Lines starting with '#' are comments. 'inf' may appear as the death value.
"""

import logging
from pathlib import Path
from typing import List, Tuple

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


def read_persistence_intervals_and_dimension(path: str) -> pd.DataFrame:
    """
    Read persistence intervals together with their dimension.

    Parameters
    ----------
    path : str
        Path to the interval file.

    Returns
    -------
    pd.DataFrame
        Columns 'dimension' (int, -1 when the line has no dimension),
        'birth' and 'death' (float).

    Examples
    --------
    >>> df = read_persistence_intervals_and_dimension("diagram.pers")
    >>> df.columns.tolist()
    ['dimension', 'birth', 'death']
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    def skip_line(fields):
        logger.warning(f"Skipping line with {len(fields)} entries in {path}: {' '.join(fields)}")
        return None

    try:
        raw = pd.read_csv(
            path,
            sep=r"\s+",
            comment="#",
            header=None,
            names=list(range(4)),
            engine="python",
            skip_blank_lines=True,
            on_bad_lines=skip_line,
        )
    except pd.errors.EmptyDataError:
        raw = pd.DataFrame(columns=list(range(4)))
    raw = raw.apply(pd.to_numeric, errors="coerce")

    # count leading numeric entries only
    n_values = raw.notna().astype(int).cumprod(axis=1).sum(axis=1)
    too_short = n_values < 2
    if too_short.any():
        logger.warning(f"Skipping {int(too_short.sum())} line(s) with fewer than 2 entries in {path}")

    rows = []
    for n, layout in ((2, (None, 0, 1)), (3, (0, 1, 2)), (4, (1, 2, 3))):
        sub = raw[n_values == n]
        dim_col, birth_col, death_col = layout
        rows.append(
            pd.DataFrame(
                {
                    "dimension": -1 if dim_col is None else sub[dim_col].astype(int),
                    "birth": sub[birth_col].astype(np.float64),
                    "death": sub[death_col].astype(np.float64),
                },
                index=sub.index,
            )
        )
    df = pd.concat(rows).sort_index().reset_index(drop=True)
    df["dimension"] = df["dimension"].astype(int)
    return df


def read_persistence_intervals_in_dimension(path: str, dimension: int = -1) -> np.ndarray:
    """
    Read the persistence intervals of one dimension.

    Parameters
    ----------
    path : str
        Path to the interval file.
    dimension : int, default=-1
        Dimension to keep. -1 keeps every interval.

    Returns
    -------
    np.ndarray
        (birth, death) pairs of shape (n, 2).
    """
    df = read_persistence_intervals_and_dimension(path)
    if dimension != -1:
        df = df[df["dimension"] == dimension]
    return df[["birth", "death"]].to_numpy(dtype=np.float64).reshape(-1, 2)


def read_persistence_intervals_in_one_dimension_from_file(
    path: str,
    dimension: int = -1,
    what_to_substitute_for_infinite_bar: float = -1,
) -> List[Tuple[float, float]]:
    """
    Read finite persistence intervals of one dimension, birth first.

    Parameters
    ----------
    path : str
        Path to the interval file.
    dimension : int, default=-1
        Dimension to keep. -1 keeps every interval.
    what_to_substitute_for_infinite_bar : float, default=-1
        Death value given to infinite intervals. With the default -1,
        infinite intervals are dropped. Infinite intervals born at or after
        the substitute are dropped too.

    Returns
    -------
    list of (float, float)
        Intervals with birth <= death.

    Examples
    --------
    >>> read_persistence_intervals_in_one_dimension_from_file("d.pers", 1, 10.0)
    [(0.5, 2.0), (1.0, 10.0)]
    """
    intervals = read_persistence_intervals_in_dimension(path, dimension)
    final_barcode = []
    for birth, death in intervals:
        if birth > death:
            final_barcode.append((float(death), float(birth)))
        elif death != np.inf:
            final_barcode.append((float(birth), float(death)))
        elif what_to_substitute_for_infinite_bar != -1 and birth < what_to_substitute_for_infinite_bar:
            final_barcode.append((float(birth), float(what_to_substitute_for_infinite_bar)))
    logger.debug(f"Read {len(final_barcode)} of {len(intervals)} intervals from {path}")
    return final_barcode
