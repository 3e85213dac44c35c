"""Configuration and constants."""

import logging
import os

DEFAULT_TURTLE = """@prefix ex: <http://example.org/> .
@prefix foaf: <http://xmlns.com/foaf/0.1/> .

ex:Alice a foaf:Person ;
    foaf:name "Alice Smith" ;
    foaf:age 30 ;
    foaf:mbox <mailto:alice@example.org> ;
    ex:knows ex:Bob .

ex:Bob a foaf:Person ;
    foaf:name "Bob Jones" ;
    foaf:occupation "Data Scientist" ;
    ex:worksAt ex:CompanyX .

ex:CompanyX a ex:Organization ;
    ex:location "San Francisco" ;
    ex:employeeCount 500 ."""

SYSTEM_INSTRUCTION = """You are a Semantic Web Assistant.

LABELING RULES:
- **(Verified)**: Statements directly supported by the provided triples.
- **(Conceptual)**: Inferences, common-sense knowledge, or interpretations.
- If a requested fact cannot be resolved to the graph, explicitly state: "Fact not found in dataset."

LINKING:
- Use the exact IDs (e.g., ex:Alice) or Labels (e.g., Alice) from the graph in your responses.
- Keep responses concise. Always note that AI can make mistakes."""

CONFIG = {
    "LAYOUT": {
        "link_distance": 180.0,
        "charge_strength": -800.0,
        "collision_radius": 80.0,
        "warm_alpha": 0.2,
        "drag_alpha_target": 0.2,
        "alpha_min": 0.001,
        "velocity_decay": 0.4,
        "center_strength": 1.0,
        "collision_strength": 1.0,
        "initial_radius": 10.0,
        "max_settle_ticks": 300,
    },
    "INTERACTION": {
        "scale_extent": (0.1, 4.0),
        "focus_scale": 1.2,
        "focus_duration_ms": 750,
        "highlight_duration_ms": 500,
        "reset_duration_ms": 200,
        "node_radius": 18.0,
        "highlight_radius": 22.0,
        "stroke_width": 2.0,
        "highlight_stroke_width": 5.0,
    },
    "VIEWPORT": {
        "width": 900,
        "height": 750,
    },
    "COLORS": {
        "iri_stroke": "#3b82f6",
        "bnode_stroke": "#94a3b8",
        "node_fill": "#ffffff",
        "link": "#cbd5e1",
        "link_label": "#94a3b8",
        "node_label": "#334155",
        "background": "#f1f5f9",
    },
    "CHAT": {
        "model": "gemini-3-flash-preview",
        "endpoint": "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent",
        "timeout": 60,
        "system_instruction": SYSTEM_INSTRUCTION,
        "default_prompt": "Summarize the relationships in this dataset.",
    },
    "DEFAULT_TURTLE": DEFAULT_TURTLE,
}

# Logging configuration
logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")


def get_api_key() -> str:
    return str(os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or "").strip()
