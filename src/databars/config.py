DEFAULT_DATABARS_CONFIG = {
    "data_bars": {
        "colors": "#1e90ff",
        "background": None,
        "commas": False,
        "percent": False,
        "percent_scale": "fraction",
        "alignment": "left",
        "decimals": None,
        "abbreviate": False,
        "prefix": "",
        "suffix": "",
        "negative_policy": "abs",
        "text_position": "outside-end",
        "max_value": None,
        "fill_opacity": 1.0,
        "bar_height": 16,
        "round_edges": False,
        "text_color": "#120B2C",
        "bold_text": False,
        "missing_text": "",
    },
    "data_bars_pos_neg": {
        "colors": "#1e90ff",
        "background": None,
        "commas": False,
        "percent": False,
        "percent_scale": "fraction",
        "alignment": "right",
        "decimals": None,
        "abbreviate": False,
        "prefix": "",
        "suffix": "",
        "text_position": "outside-end",
        "max_value": None,
        "fill_opacity": 1.0,
        "bar_height": 16,
        "round_edges": False,
        "text_color": "#120B2C",
        "bold_text": False,
        "missing_text": "",
    },
    "table": {
        "cell_padding": "4px 8px",
        "font_family": "Maison Neue, sans-serif",
        "font_size": "14px",
        "header_fill": "#5637cd",
        "header_font": "white",
        "hide_index": True,
    },
    "output": {
        "default_dir": "output",
    },
}
