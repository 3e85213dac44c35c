"""Graph metrics (networkx), tabular views (pandas) and JSON-LD export."""

import logging
from typing import Any, Dict

import networkx as nx
import pandas as pd

from rdf_explorer.models import GraphData
from rdf_explorer.utils import profile_time, safe_text


def to_networkx(graph_data: GraphData) -> nx.MultiDiGraph:
    G = nx.MultiDiGraph()
    for node in graph_data.nodes:
        G.add_node(node.id, label=node.label, kind=node.kind.value)
    for link in graph_data.valid_links():
        G.add_edge(link.source, link.target, label=link.label)
    return G


@profile_time
def compute_node_metrics(graph_data: GraphData) -> Dict[str, Dict[str, float]]:
    multi = to_networkx(graph_data)
    G = nx.DiGraph(multi)
    degree = nx.degree_centrality(G)
    betweenness = nx.betweenness_centrality(G)
    closeness = nx.closeness_centrality(G)
    metrics = {}
    for node_id in multi.nodes():
        metrics[node_id] = {
            "in_degree": multi.in_degree(node_id),
            "out_degree": multi.out_degree(node_id),
            "degree": degree.get(node_id, 0),
            "betweenness": betweenness.get(node_id, 0),
            "closeness": closeness.get(node_id, 0),
        }
    return metrics


def graph_summary(graph_data: GraphData) -> Dict[str, int]:
    G = to_networkx(graph_data)
    return {
        "nodes": len(graph_data.nodes),
        "links": len(graph_data.links),
        "components": nx.number_weakly_connected_components(G) if len(G) else 0,
        "literal_values": sum(len(v) for n in graph_data.nodes for v in n.properties.values()),
    }


def nodes_frame(graph_data: GraphData) -> pd.DataFrame:
    rows = []
    for n in graph_data.nodes:
        props = "; ".join(f"{k}={', '.join(v)}" for k, v in n.properties.items())
        rows.append({"ID": n.id, "Label": n.label, "Kind": n.kind.value, "Properties": safe_text(props)})
    return pd.DataFrame(rows, columns=["ID", "Label", "Kind", "Properties"])


def links_frame(graph_data: GraphData) -> pd.DataFrame:
    rows = [{"Source": l.source, "Label": l.label, "Target": l.target} for l in graph_data.links]
    return pd.DataFrame(rows, columns=["Source", "Label", "Target"])


def graph_to_jsonld(graph_data: GraphData) -> Dict[str, Any]:
    nodes_dict = {}
    for node in graph_data.nodes:
        entry = {"@id": node.id, "label": node.label, "x": node.x, "y": node.y}
        for key, values in node.properties.items():
            entry["ex:" + key] = values[0] if len(values) == 1 else list(values)
        nodes_dict[node.id] = entry
    for link in graph_data.valid_links():
        prop = "ex:" + link.label
        ref = {"@id": link.target}
        source = nodes_dict[link.source]
        if prop in source:
            if isinstance(source[prop], list):
                source[prop].append(ref)
            else:
                source[prop] = [source[prop], ref]
        else:
            source[prop] = ref
    logging.info(f"Exported {len(nodes_dict)} node(s) to JSON-LD.")
    return {"@context": {"label": "http://www.w3.org/2000/01/rdf-schema#label", "x": "http://example.org/x",
                         "y": "http://example.org/y", "ex": "http://example.org/"},
            "@graph": list(nodes_dict.values())}
