"""
Numerical constants and defaults for the pricing core.

Every default here can be overridden per call with a keyword argument.
"""

# Discounting time basis: actual days over 365
DAYS_PER_YEAR = 365.0

# Denominator for ACT/360 and the simplified 30/360 rule
DAYS_PER_YEAR_360 = 360.0

BASIS_POINT = 1e-4

# Newton-Raphson yield solving
TOL = 1e-6
MAX_ITER = 100
DERIVATIVE_STEP = 1e-4

# Midpoint-rule steps for the protection leg integral
INTEGRATION_STEPS = 365

# CDS premium dates roll on the IMM day of month
CDS_ROLL_DAY = 20
