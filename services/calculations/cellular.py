"""
Cellular system sizing: cell count, offered traffic and reuse cluster size.

    A_cell       = (3*sqrt(3)/2) * R^2                   (hexagon area)
    cells        = ceil(coverage area / A_cell)
    A_user       = calls per hour * call duration [min] / 60   (Erlangs)
    A_total      = subscribers * A_user
    A_per_cell   = A_total / cells
    SIR          = 10^(SIR_dB / 10)
    N            = ceil((1/3) * (6 * SIR)^(2 / n))         (six first-tier interferers)
"""

from typing import Any, Dict
import logging
import math

from services.calculations.base import BaseFormulaCalculator
from services.calculations.special_functions import db_to_linear
from services.explanations import get_renderer

logger = logging.getLogger(__name__)

HEXAGON_AREA_FACTOR = 3 * math.sqrt(3) / 2
FIRST_TIER_INTERFERERS = 6


def hexagon_area(radius: float) -> float:
    return HEXAGON_AREA_FACTOR * radius ** 2


def cluster_size(sir_linear: float, path_loss_exponent: float) -> int:
    return math.ceil(
        (1 / 3) * (FIRST_TIER_INTERFERERS * sir_linear) ** (2 / path_loss_exponent)
    )


class CellularSizingCalculator(BaseFormulaCalculator):
    """
    Example:
        - 1000 km2 coverage with 2 km cells (10.39 km2 each) -> 97 cells
        - 50,000 subscribers, 2 calls/hour of 3 min -> 0.1 E each, 5000 E total
        - 18 dB SIR with n=4 -> cluster size 7
    """

    formula_code = "cellular"
    template_name = "cellular.txt"
    required_fields = (
        "coverageArea",
        "cellRadius",
        "subscribers",
        "callsPerHour",
        "callDuration",
        "requiredSir",
        "pathLossExponent",
    )

    def calculate(self) -> Dict[str, Any]:
        coverage_area = self._positive("coverageArea")
        cell_radius = self._positive("cellRadius")
        subscribers = self._non_negative("subscribers")
        calls_per_hour = self._non_negative("callsPerHour")
        call_duration = self._non_negative("callDuration")
        required_sir = self._number("requiredSir")
        path_loss_exponent = self._positive("pathLossExponent")

        cell_area = hexagon_area(cell_radius)
        num_cells = math.ceil(coverage_area / cell_area)
        traffic_per_user = calls_per_hour * call_duration / 60
        total_traffic = subscribers * traffic_per_user
        traffic_per_cell = total_traffic / num_cells
        sir_linear = db_to_linear(required_sir)
        reuse = cluster_size(sir_linear, path_loss_exponent)

        logger.info(
            f"Cellular: {num_cells} cells of {cell_area:.2f}, "
            f"A_total={total_traffic:.2f}E ({traffic_per_cell:.2f}E/cell), "
            f"SIR={required_sir}dB n={path_loss_exponent} -> N={reuse}"
        )

        explanation = get_renderer().render(
            self.template_name,
            {
                "coverage_area": coverage_area,
                "cell_radius": cell_radius,
                "subscribers": subscribers,
                "required_sir": required_sir,
                "path_loss_exponent": path_loss_exponent,
                "cell_area": cell_area,
                "num_cells": num_cells,
                "traffic_per_user": traffic_per_user,
                "total_traffic": total_traffic,
                "traffic_per_cell": traffic_per_cell,
                "sir_linear": sir_linear,
                "cluster_size": reuse,
            },
        )

        return {
            "cellArea": cell_area,
            "numCells": num_cells,
            "trafficPerUser": traffic_per_user,
            "totalTraffic": total_traffic,
            "trafficPerCell": traffic_per_cell,
            "sirLinear": sir_linear,
            "clusterSize": reuse,
            "explanation": explanation,
        }
