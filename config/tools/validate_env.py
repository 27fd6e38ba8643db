# config/tools/validate_env.py

import sys           # for exit codes
from pprint import pprint  # for structured printing

# make src discoverable if running as a script
from pathlib import Path
# __file__ is .../config/tools/validate_env.py
# parents[2] is the project root; append ROOT/src
PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(PROJECT_ROOT / "src"))

import numpy as np  # noqa: E402

from env.loader import build_pathfinder, load_pathfinder_config  # noqa: E402
from env.schema import METRIC_HEIGHT_MAP  # noqa: E402


def main() -> None:
    """Load the active pathfinder profile and build it once, failing fast on errors."""
    profile = sys.argv[1] if len(sys.argv) > 1 else None
    try:
        config = load_pathfinder_config(profile=profile)
        # height_map profiles need an array; a flat one is enough to validate shapes
        hmap = np.zeros(config.dims, dtype=int) if config.metric == METRIC_HEIGHT_MAP else None
        pathfinder = build_pathfinder(config, hmap=hmap)
    except (OSError, ValueError, KeyError) as e:
        print("Pathfinder config validation FAILED:", file=sys.stderr)
        print(repr(e), file=sys.stderr)
        sys.exit(1)                          # non-zero exit: CI will mark as failed

    print("Pathfinder config validation OK.")
    print("\nActive profile:", config.name)
    print("\nResolved config:")
    pprint(config)
    print("\nPathfinder:", pathfinder)


if __name__ == "__main__":
    main()  # run main() only when script is executed directly
