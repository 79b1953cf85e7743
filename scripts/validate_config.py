#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from journal_app.config.loader import ConfigLoader
from journal_app.config.validation import ConfigValidator, FieldError
from journal_app.errors import DataQualityError


def validate_merged_config(loader: ConfigLoader) -> List[FieldError]:
    """Validate defaults merged with journal.yaml and the environment."""
    config = loader.merge_config()
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)

    print(f"🔍 Validating trading journal configuration in {loader.config_dir}...")

    try:
        errors = validate_merged_config(loader)
    except DataQualityError as e:
        print(f"❌ Could not read configuration: {e}")
        sys.exit(1)

    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    config = loader.load()
    print(f"✅ Configuration is valid")
    print(f"  • starting balance: {config.ledger.default_starting_balance}")
    print(f"  • database: {config.storage.db_path}")
    print(f"  • price feed: {config.price_feed.symbol} every {config.price_feed.poll_interval_seconds}s")
    sys.exit(0)


if __name__ == "__main__":
    main()
