import os
from dotenv import load_dotenv


def diagnose(key):
    """Return (ok, lines) describing the configured Gemini key."""
    if not key:
        return False, [
            "❌ FAILURE: Python cannot find 'GEMINI_API_KEY'.",
            "Check: Did you name the file '.env' exactly? Is it in the same folder?",
        ]
    if not key.startswith("AIza"):
        return False, [
            f"⚠️ WARNING: Your key looks weird. It starts with '{key[:4]}...'",
            "Gemini keys normally start with 'AIza'. Check for typos.",
        ]
    return True, [
        "✅ SUCCESS: Key found!",
        f"Key loaded: {key[:10]}... (hidden)",
    ]


def main():
    # Force reload of the .env file
    load_dotenv(override=True)

    ok, lines = diagnose(os.getenv("GEMINI_API_KEY"))
    print("\n--- DIAGNOSTIC REPORT ---")
    for line in lines:
        print(line)
    print("-------------------------\n")
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
