from .files import exists as exists
from .int64_array import (
    INT64_MAX as INT64_MAX,
    INT64_MIN as INT64_MIN,
    Int64Array as Int64Array,
    Sortable as Sortable,
    sort_in_place as sort_in_place,
)
from .slug import generate_slug as generate_slug
