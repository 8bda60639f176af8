from .models import ChartConfiguration, ChartKind, ChartPoint, LineStyle, Orientation, StyleMode  # noqa: F401
from .state import ChartSnapshot, ChartState  # noqa: F401
from .errors import ConfigurationError, ErrorKind, ImportResult  # noqa: F401
