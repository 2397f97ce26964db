"""Scalar cell type shared by parsed sheet tables.

A cell is one of string, number, boolean or null. Validation is strict so a
``None`` never turns into ``""`` or ``0`` and ``True`` never turns into ``1``.
"""

from typing import Optional, Union

from pydantic import StrictBool, StrictFloat, StrictInt, StrictStr

CellValue = Optional[Union[StrictBool, StrictInt, StrictFloat, StrictStr]]


__all__ = ["CellValue"]
