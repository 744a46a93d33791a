import os
import sys
import json
import logging
from pathlib import Path

# Add parent directory to path for imports
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from drawing_analysis import analyze, result_to_payload
from multi_vision import get_provider_status, recognize_text

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def analyze_specific_drawing(path, quantity=1):
    """Run OCR and the full analysis on a drawing file and print each stage"""
    with open(path, 'rb') as f:
        file_bytes = f.read()

    print("\n=== OCR PROVIDERS ===")
    print(json.dumps(get_provider_status(), indent=2))

    # 1. Recognize text
    text = recognize_text(file_bytes, filename=os.path.basename(path))
    print("\n=== EXTRACTED TEXT (first 1000 chars) ===")
    print(text[:1000])

    # 2. Full analysis
    result = analyze(text, quantity)
    print("\n=== DIMENSIONS ===")
    for dim in result.dimensions:
        print(f"{dim.kind.value:>7}: {dim.format()}")

    print("\n=== FULL ANALYSIS RESULTS ===")
    print(json.dumps(result_to_payload(result), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/analyze_drawing.py <drawing.pdf|png> [quantity]")
        sys.exit(2)

    analyze_specific_drawing(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else 1)
