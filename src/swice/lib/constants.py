import numpy as np

PI_2 = 2 * np.pi

# Meylan et al. (2014) fit, used to blend the floe-size fit at long periods.
MEYLAN_A = 2.12e-3
MEYLAN_B = 4.59e-2

# Maximum number of entries of a stationary step function.
MAX_STEPS = 10
