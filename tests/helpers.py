from datetime import datetime

# Fixed reference instant for all time-dependent tests
T0 = datetime(2025, 6, 2, 12, 0, 0)
