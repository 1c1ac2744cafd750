# examples/demo_data_bars.py
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

# --- Initialize ---
bars = DataBars(config={"data_bars": {"background": "#EEEEEE", "round_edges": True}})

# --- Generate Synthetic Data ---
print("Generating synthetic data for data bars...")
df_table = pd.DataFrame(
    {
        "Protocol": ["Lido", "Aave", "Maker", "Uniswap", "Curve", "Compound"],
        "TVL": [28_400_000_000, 11_200_000_000, 8_050_000_000, 4_300_000_000, 2_150_000_000, None],
        "Fee Share": [0.31, 0.22, 0.18, 0.15, 0.09, 0.05],
        "Users": [310_540, 95_120, 12_876, 1_204_330, 48_900, 30_112],
    }
)
print("Synthetic data generated.")

# --- Rendering ---
print("Generating table...")
styler = bars.table(
    df_table,
    {
        "TVL": {"abbreviate": True, "prefix": "$", "decimals": 1, "missing_text": "n/a"},
        "Fee Share": {"percent": True, "colors": ["#D7F2FF", "#1e90ff", "#5637cd"]},
        "Users": {"commas": True, "text_position": "inside-end", "text_color": "white"},
    },
)
ok, message = bars.save_table(styler, "Protocol Summary", save_path=str(OUTPUT_DIR))
print(f"Table HTML saved to '{message}'" if ok else message)

# A single renderer can also be used cell by cell
render = bars.data_bars([100, 200, 300])
for value in (100, 200, 300):
    print(value, render.width(value), render(value).text)
print("-" * 30)
