"""Display layer: views that present the forecast collection."""

from rpiforecast.display.console import ConsoleForecastView
from rpiforecast.display.protocols import ForecastView, MockView

__all__ = ["ConsoleForecastView", "ForecastView", "MockView"]
