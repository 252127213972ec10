"""CSV export for gallery datasets.

Thin wrapper over ``DataStore.dataset_rows`` and pandas.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from chartgallery.store import DataStore


def export_dataset_csv(
    store: DataStore,
    name: str,
    output_path: str | Path,
) -> int:
    """Export the named dataset to a CSV file.

    Args:
        store: Store holding the dataset.
        name: Dataset name, one of ``store.dataset_names()``.
        output_path: Path to write the CSV file.

    Returns:
        Number of rows written.
    """
    rows = store.dataset_rows(name)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(rows).to_csv(output_path, index=False)
    return len(rows)
