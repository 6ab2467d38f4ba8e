from __future__ import annotations

import pandas as pd

def conform_to_columns(df: pd.DataFrame, columns: list[str]) -> pd.DataFrame:
    # add missing columns
    for c in columns:
        if c not in df.columns:
            df[c] = None

    # order = declared first + extras last
    ordered = columns + [c for c in df.columns if c not in columns]
    return df[ordered]
