#!/usr/bin/env python3
"""
CLI demo for the breakdown resolver.

Resolves a breakdown JSON file (one raw list per category plus optional
scenes) and prints the canonical entities per category.

    PYTHONPATH=src python demo/cli_demo.py breakdown.json
"""
import json
import logging
import sys

from dotenv import load_dotenv

# Imports assume PYTHONPATH=src is set (or the package is installed)
from breakdown_resolver.config_loader import load_config_from_env
from breakdown_resolver.exceptions import ResolverError
from breakdown_resolver.resolver import EntityResolver, results_to_dict

# Load environment variables
load_dotenv()

SAMPLE_BREAKDOWN = {
    "characters": ["Rachel", "RACHEL WELLS", "Dr. Rachel Wells", "Howard", "Howard (V.O.)"],
    "locations": ["INT. WELLS HOUSE - KITCHEN - NIGHT", "Wells House", "EXT. PARKING LOT - RACHEL'S CAR - DAY"],
    "props": ["Phone", "Rachel's Cellphone", "Glasses", "Beer Bottle", "Rain", "Briefcase"],
    "wardrobe": ["Rachel - blue dress", "Rachel's coat", "Howard's tie"],
    "vehicles": ["Cop Car", "Howard's Corvette"],
    "scenes": [
        {"sceneNumber": 1, "characters": ["Howard", "Rachel"], "keyObjects": ["Briefcase", "Phone"],
         "locationName": "INT. WELLS HOUSE - KITCHEN - NIGHT"},
        {"sceneNumber": 2, "characters": ["Howard"], "keyObjects": ["Briefcase", "Glasses", "Beer Bottle"],
         "locationName": "INT. BAR - NIGHT"},
    ],
}


def print_banner():
    """Print welcome banner."""
    print("\n" + "=" * 60)
    print("  Breakdown Resolver - CLI Demo")
    print("=" * 60 + "\n")


def print_results(output):
    """Print resolved categories."""
    for category, result in output.items():
        print(f"[{category}]")
        for group in result["groups"]:
            print(f"  {group['parentName']}: {', '.join(group['variants'])}")
        if result["ungrouped"]:
            print(f"  (ungrouped) {', '.join(result['ungrouped'])}")
        print("-" * 60)


def load_breakdown(path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def main():
    """Main CLI entry point."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    print_banner()

    try:
        config = load_config_from_env()
    except ResolverError as e:
        print(f"❌ Configuration error: {e}")
        sys.exit(1)

    paths = [arg for arg in sys.argv[1:] if not arg.startswith("--")]
    if paths:
        breakdown = load_breakdown(paths[0])
    else:
        print("No file given; resolving the built-in sample breakdown.\n")
        breakdown = SAMPLE_BREAKDOWN

    resolver = EntityResolver(config)
    output = results_to_dict(resolver.resolve_breakdown(breakdown))

    if "--json" in sys.argv:
        print(json.dumps(output, indent=2))
    else:
        print_results(output)


if __name__ == "__main__":
    main()
