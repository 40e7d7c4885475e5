#!/usr/bin/env python3
"""Helper script to check and create .env file for Supabase configuration."""

from pathlib import Path
import os
import sys

ENV_TEMPLATE = """# Supabase Configuration (required: restaurants and delivery_zones are read from here)
# Get these from: https://supabase.com/dashboard → Your Project → Settings → API
DZ_SUPABASE_URL=https://your-project-id.supabase.co
DZ_SUPABASE_KEY=your-service-role-key-here

# API Configuration
DZ_API_PREFIX=/api
DZ_LOG_LEVEL=INFO
# DZ_FRONTEND_ALLOWED_ORIGINS - JSON array or comma-separated list
"""


def _mask(value: str) -> str:
    return value[:20] + "..." + value[-10:] if len(value) > 20 else value


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Supabase Environment Variables Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"❌ .env file NOT found at: {env_file}")
        env_file.write_text(ENV_TEMPLATE, encoding="utf-8")
        print(f"✅ Created template .env file at: {env_file}")
        print("⚠️  Please edit .env and add your Supabase credentials!")
        return

    print(f"✅ Found .env file at: {env_file}")
    for line in env_file.read_text(encoding="utf-8").splitlines():
        if line.startswith("DZ_SUPABASE_KEY="):
            name, value = line.split("=", 1)
            print(f"{name}={_mask(value.strip())}")
        else:
            print(line)
    print()

    for name in ("DZ_SUPABASE_URL", "DZ_SUPABASE_KEY"):
        value = os.getenv(name)
        if value:
            print(f"✅ {name} (from environment): {_mask(value)}")
        else:
            print(f"❌ {name} not found in environment")
    print()

    try:
        sys.path.insert(0, str(project_root / "src"))
        from delivery_zones.config import settings
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    if settings.supabase_url and settings.supabase_key:
        print("✅ SUCCESS: Supabase is configured!")
    else:
        print("❌ ERROR: Supabase is NOT configured")
        print("Make sure variables start with the DZ_ prefix and restart the backend after editing .env")


if __name__ == "__main__":
    main()
