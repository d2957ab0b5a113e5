from typing import Type

import pandas as pd
from sqlalchemy.engine.base import Engine

from covid_db.models import Base


def fast_append_to_sql(
    df: pd.DataFrame, engine: Engine, table_type: Type[Base], chunksize: int = 50_000
) -> int:
    """
    Append the columns of `df` that belong to `table_type` to its table

    All of the table's columns must be present in `df`; extra columns
    are ignored. The whole frame is written in a single transaction.

    Returns
    -------
    rows : int
        The number of rows written
    """
    table = table_type.__table__
    cols = [x.name for x in table.columns]
    temp_df = df.reset_index(drop=True)

    # make sure we have the columns
    have_cols = set(list(temp_df))
    missing_cols = set(cols) - have_cols
    if len(missing_cols) > 0:
        msg = "Missing columns {}".format(", ".join(sorted(missing_cols)))
        raise ValueError(msg)

    if engine.dialect.name not in ("sqlite", "postgresql"):
        raise NotImplementedError("Only implemented for sqlite and postgres")

    with engine.begin() as con:
        temp_df[cols].to_sql(
            table.name,
            con,
            if_exists="append",
            index=False,
            chunksize=chunksize,
            method="multi" if engine.dialect.name == "postgresql" else None,
        )

    return temp_df.shape[0]
