# examples/demo_pos_neg.py
import logging
import pandas as pd
from pathlib import Path
import sys

# Add the src directory to the Python path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root / "src"))

from databars import DataBars

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# --- Configuration ---
OUTPUT_DIR = project_root / "output"
OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

bars = DataBars()

# --- Generate Synthetic Data ---
print("Generating synthetic data for diverging bars...")
df_table = pd.DataFrame(
    {
        "Asset": ["BTC", "ETH", "SOL", "AVAX", "DOT", "LINK"],
        "7d Change": [0.084, -0.032, 0.215, -0.147, 0.0, "n/a"],
        "Net Flows": [1_250_000, -860_000, 420_000, -1_900_000, 75_000, -15_000],
    }
)
print("Synthetic data generated.")

# --- Rendering ---
print("Generating table...")
styler = bars.table(
    df_table,
    {
        "7d Change": {
            "kind": "data_bars_pos_neg",
            "colors": ["#EF798A", "#ffffff", "#5637cd"],
            "percent": True,
            "decimals": 1,
        },
        "Net Flows": {
            "kind": "data_bars_pos_neg",
            "colors": ["#ff3030", "#1e90ff"],
            "commas": True,
            "background": "#F5F5F5",
            "alignment": "center",
        },
    },
)
ok, message = bars.save_table(styler, "Weekly Asset Moves", save_path=str(OUTPUT_DIR))
print(f"Table HTML saved to '{message}'" if ok else message)
print("-" * 30)
