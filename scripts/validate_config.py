#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List, Optional

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from power_position.config.loader import ConfigLoader
from power_position.config.validation import ValidationError
from power_position.errors import ConfigurationError


def validate_config_file(config_file: Optional[Path]) -> List[ValidationError]:
    """Validate a configuration file merged over the defaults."""
    try:
        ConfigLoader.create(config_file).load()
    except ConfigurationError as e:
        if not e.errors:
            raise
        return list(e.errors)
    return []


def main():
    """Main validation function."""
    config_file = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    print(f"🔍 Validating configuration: {config_file or 'bundled config/settings.yaml'}")

    try:
        errors = validate_config_file(config_file)
    except ConfigurationError as e:
        print(f"❌ {e}")
        sys.exit(1)

    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value!r})")
        sys.exit(1)

    config = ConfigLoader.create(config_file).load()
    print(f"✅ Interval: {config.extraction.interval_minutes} minutes")
    print(f"✅ Timezone: {config.extraction.timezone}")
    print(f"✅ Output folder: {config.output.folder}")
    print(f"✅ Retry: {config.retry.max_attempts} attempts, {config.retry.delay_seconds}s apart")
    print(f"\n🎉 Configuration validation passed!")
    sys.exit(0)


if __name__ == "__main__":
    main()
