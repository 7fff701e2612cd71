"""Utility functions for the recommendation engine.

This module turns purchase histories into sparse user-product count
matrices and loads seed histories from CSV files.
"""

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy.sparse import csr_matrix

# Configure module logger
logger = logging.getLogger(__name__)

DEFAULT_USER_COL = "user"
DEFAULT_ITEM_COL = "product"


def history_to_matrix(
    history: Mapping[str, Sequence[str]],
) -> Tuple[csr_matrix, Dict[str, int], Dict[str, int]]:
    """Build a sparse user-product count matrix from purchase histories.

    Rows are users and columns are product names, both in sorted order.
    Repeat purchases add up, so an entry is the number of times the user
    bought that product.

    Args:
        history: Mapping from user to the ordered product names they bought.

    Returns:
        A tuple containing:
            - Sparse CSR matrix of shape (n_users, n_products) with counts
            - Dictionary mapping user to matrix row index
            - Dictionary mapping product name to matrix column index

    Example:
        >>> matrix, user_map, product_map = history_to_matrix(
        ...     {"U1": ["Milk"], "U2": ["Milk", "Bread", "Milk"]}
        ... )
        >>> int(matrix[user_map["U2"], product_map["Milk"]])
        2
    """
    unique_users = sorted(history)
    unique_products = sorted({name for names in history.values() for name in names})

    user_to_idx = {user: idx for idx, user in enumerate(unique_users)}
    product_to_idx = {name: idx for idx, name in enumerate(unique_products)}

    row_indices: List[int] = []
    col_indices: List[int] = []
    for user, names in history.items():
        row = user_to_idx[user]
        for name in names:
            row_indices.append(row)
            col_indices.append(product_to_idx[name])

    # Duplicate (row, col) pairs are summed into purchase counts
    data = np.ones(len(row_indices), dtype=np.int64)
    matrix = csr_matrix(
        (data, (row_indices, col_indices)),
        shape=(len(unique_users), len(unique_products)),
        dtype=np.int64,
    )
    matrix.sum_duplicates()

    logger.debug(
        "Built purchase matrix",
        extra={
            "num_users": len(unique_users),
            "num_products": len(unique_products),
            "nnz": int(matrix.nnz),
        },
    )
    return matrix, user_to_idx, product_to_idx


def load_purchase_history(
    csv_path: str,
    user_col: str = DEFAULT_USER_COL,
    item_col: str = DEFAULT_ITEM_COL,
) -> Dict[str, List[str]]:
    """Load past purchases from a CSV file, one row per purchase.

    Row order is purchase order. Extra columns (timestamps, quantities) are
    ignored.

    Args:
        csv_path: Path to the CSV file.
        user_col: Column holding the shopper identifier.
        item_col: Column holding the product name.

    Returns:
        Dictionary mapping each user to their product names, in file order.

    Raises:
        FileNotFoundError: If the CSV file does not exist.
        ValueError: If required columns are missing.
    """
    csv_file = Path(csv_path)
    if not csv_file.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    logger.info(f"Loading purchase history from {csv_path}")
    # Identifiers are read as text so "007" stays "007"
    df = pd.read_csv(csv_file, dtype=str)

    required_columns = {user_col, item_col}
    if not required_columns.issubset(df.columns):
        missing = required_columns - set(df.columns)
        raise ValueError(f"CSV missing required columns: {missing}")

    df = df.dropna(subset=[user_col, item_col])
    users = df[user_col]
    items = df[item_col]

    history: Dict[str, List[str]] = {}
    for user, name in zip(users, items):
        history.setdefault(user, []).append(name)

    logger.info(
        f"Loaded {len(df)} purchases for {len(history)} users"
    )
    return history
