#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from price_ticker.config.loader import ConfigLoader
from price_ticker.config.validation import ConfigValidator


def main() -> int:
    """Validate the given configuration file, or config/ticker.yaml."""
    config_path = Path(sys.argv[1]) if len(sys.argv) > 1 else project_root / "config" / "ticker.yaml"
    print(f"🔍 Validating {config_path}...")

    loader = ConfigLoader.create(config_path)

    try:
        merged = loader.merge_config()
    except Exception as e:
        print(f"❌ Could not load configuration: {e}")
        return 1

    errors = ConfigValidator.validate_config(merged)
    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value!r})")
        return 1

    config = loader.load()
    print("✅ Configuration is valid")
    print(f"  endpoint:  {config.endpoint.url}")
    print(f"  field:     {'.'.join(config.endpoint.price_path)}")
    print(f"  attempts:  {config.retry.max_attempts} "
          f"(backoff {config.retry.transport_backoff}s / 429: {config.retry.rate_limit_backoff}s "
          f"/ 5xx: {config.retry.server_error_backoff}s)")
    print(f"  interval:  {config.schedule.interval_ticks} x {config.schedule.tick_seconds}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
