"""Physical constants and reference engine parameters.

This module defines process-wide, read-only values:
- Thermodynamic properties of air and water at T=273K
- Molar masses and the water/air molar-mass ratio
- The reference engine the example config is built from
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from .units import Dimension, Quantity

# Specific heat of dry air at constant pressure at T=273K.
C_P_AIR = Quantity.of(1006.0, "J/(kg*K)", Dimension.SPECIFIC_HEAT)

# Specific heat of dry mixture at constant pressure; assumes no fuel.
C_P_DFM = C_P_AIR

# Specific heat of water vapor at constant pressure at T=273K.
C_P_VAP = Quantity.of(1805.0, "J/(kg*K)", Dimension.SPECIFIC_HEAT)

# Enthalpy of vaporisation of water at T=273K.
L_W = Quantity.of(2501.0, "kJ/kg", Dimension.ENTHALPY)

# Molar masses
M_W = Quantity.of(18.0153, "g/mol", Dimension.MOLAR_MASS)  # water vapor
M_AIR = Quantity.of(28.9645, "g/mol", Dimension.MOLAR_MASS)  # dry air

# Molar mass ratio water/air (dimensionless).
A_W: float = M_W / M_AIR

PHYSICAL_CONSTANTS: Mapping[str, Quantity] = MappingProxyType(
    {
        "c_p_air": C_P_AIR,
        "c_p_dfm": C_P_DFM,
        "c_p_vap": C_P_VAP,
        "l_w": L_W,
        "M_w": M_W,
        "M_air": M_AIR,
    }
)

# Reference engine (2.0 L, 100 psi water supply, 340 mL/min nozzle at that pressure)
REF_DISPLACEMENT = "2.0 L"
REF_WATER_PRESSURE = "100 psi"
REF_MAX_WATER_FLOW_RATE = "340 mL/min"
