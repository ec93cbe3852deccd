from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Output directory for simulation reports
REPORTS_DIR = PROJECT_ROOT / "data" / "reports"

# Monte Carlo parameters
DEFAULT_NUM_DRAWS = 100_000
DEFAULT_SEED = 42

# Max allowed gap between configured and observed drop rate (percentage points)
FREQUENCY_TOLERANCE_PCT = 1.0
