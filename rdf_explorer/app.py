"""Streamlit UI: sidebar input, graph view, assistant chat and data view."""

import json
import logging

import streamlit as st
import streamlit.components.v1 as components

from rdf_explorer.analysis import compute_node_metrics, graph_summary, graph_to_jsonld, links_frame, nodes_frame
from rdf_explorer.config import CONFIG
from rdf_explorer.interaction import ClickEvent, InteractionController
from rdf_explorer.layout import ForceSimulation
from rdf_explorer.mentions import render_markdown
from rdf_explorer.models import GraphData, TermKind
from rdf_explorer.render import build_network, build_scene, network_html
from rdf_explorer.state import ExplorerState

MOVE_TICKS = 60


def _init_session_state() -> None:
    if "explorer" not in st.session_state:
        st.session_state.explorer = ExplorerState()
    if "simulation" not in st.session_state:
        st.session_state.simulation = ForceSimulation()
    if "controller" not in st.session_state:
        st.session_state.controller = InteractionController(st.session_state.simulation,
                                                            on_select=st.session_state.explorer.select_node)
    if "seeded_version" not in st.session_state:
        st.session_state.seeded_version = -1
    if "focused_id" not in st.session_state:
        st.session_state.focused_id = None
    if "show_labels" not in st.session_state:
        st.session_state.show_labels = True


def _sync_layout(explorer: ExplorerState, simulation: ForceSimulation, controller: InteractionController) -> None:
    if st.session_state.seeded_version != explorer.graph_version:
        controller.reset()
        simulation.reseed(explorer.graph_data or GraphData(nodes=[]))
        simulation.run()
        st.session_state.seeded_version = explorer.graph_version
        st.session_state.focused_id = None
    if explorer.selected_id != st.session_state.focused_id:
        controller.focus_on(explorer.selected_id)
        controller.advance(max(controller.focus_duration_ms, controller.highlight_duration_ms))
        st.session_state.focused_id = explorer.selected_id


def _click_node(controller: InteractionController, node) -> None:
    controller.on_node_click(node, ClickEvent())


def render_sidebar(explorer: ExplorerState, simulation: ForceSimulation, controller: InteractionController) -> None:
    st.sidebar.subheader("Dataset")
    text = st.sidebar.text_area("Input Turtle", value=explorer.input_text, height=320, key="turtle_input")
    explorer.set_input(text)
    col_parse, col_reset = st.sidebar.columns(2)
    if col_parse.button("Visualize"):
        with st.spinner("Parsing dataset..."):
            explorer.parse()
    if col_reset.button("Reset"):
        explorer.reset_all()
        st.session_state.pop("turtle_input", None)
        st.rerun()
    st.session_state.show_labels = st.sidebar.checkbox("Show Node Labels", value=st.session_state.show_labels)

    graph = explorer.graph_data
    if not graph:
        return
    st.sidebar.markdown("---")
    labels = {n.id: n.label for n in graph.nodes}
    options = [None] + list(labels)
    current = explorer.selected_id
    choice = st.sidebar.selectbox("Select a Node", options, index=options.index(current) if current in options else 0,
                                  format_func=lambda x: "None" if x is None else labels.get(x, x))
    if choice != current:
        if choice is None:
            explorer.clear_selection()
        else:
            _click_node(controller, graph.node(choice))

    with st.sidebar.expander("Manual Node Positioning"):
        move_id = st.selectbox("Node to Move", list(labels), format_func=lambda x: labels[x], key="move_node")
        node = simulation.node(move_id)
        with st.form("position_form"):
            x_val = st.number_input("X Position", value=float(node.x or 0.0) if node else 0.0, step=10.0)
            y_val = st.number_input("Y Position", value=float(node.y or 0.0) if node else 0.0, step=10.0)
            if st.form_submit_button("Move Node") and node is not None:
                controller.on_drag_start(node)
                controller.on_drag_move(node, x_val, y_val)
                simulation.run(max_ticks=MOVE_TICKS)
                controller.on_drag_end(node)
                simulation.run()
                st.success(f"Moved '{labels[move_id]}' to (X: {x_val}, Y: {y_val})")


def render_node_details(explorer: ExplorerState) -> None:
    node = explorer.selected_node
    st.markdown("#### Node Details")
    if node is None:
        st.info("Select a node from the sidebar or a mention in the assistant to view its details.")
        return
    kind = "IRI" if node.kind is TermKind.IRI else "Blank node"
    st.markdown(f"**{node.label}** ({kind})")
    st.caption("URI / ID")
    st.code(node.id, language=None)
    st.caption("Properties")
    if node.properties:
        for key, values in node.properties.items():
            st.markdown(f"- **{key}**: " + ", ".join(values))
    else:
        st.write("No literal attributes")
    metrics = compute_node_metrics(explorer.graph_data).get(node.id)
    if metrics:
        st.markdown(f"- **Incoming links:** {metrics['in_degree']}\n"
                    f"- **Outgoing links:** {metrics['out_degree']}\n"
                    f"- **Degree Centrality:** {metrics['degree']:.3f}\n"
                    f"- **Betweenness Centrality:** {metrics['betweenness']:.3f}\n"
                    f"- **Closeness Centrality:** {metrics['closeness']:.3f}")
    if st.button("Clear Selection"):
        explorer.clear_selection()
        st.rerun()


def render_graph_tab(explorer: ExplorerState, simulation: ForceSimulation, controller: InteractionController) -> None:
    st.header("Network Graph")
    if explorer.error:
        st.error(explorer.error)
    graph = explorer.graph_data
    if not graph:
        st.info("Discovery engine offline. Paste a Turtle dataset in the sidebar and press Visualize.")
        return
    st.markdown(f"**Nodes:** {len(graph.nodes)} | **Links:** {len(graph.links)}")
    scene = build_scene(simulation, controller)
    net = build_network(scene, show_labels=st.session_state.show_labels)
    try:
        components.html(network_html(net, controller), height=CONFIG["VIEWPORT"]["height"], scrolling=False)
    except Exception as e:
        logging.error(f"Graph rendering failed: {e}")
        st.error(f"Graph generation failed: {e}")
    render_node_details(explorer)


def render_chat_tab(explorer: ExplorerState, controller: InteractionController) -> None:
    st.header("Assistant")
    graph = explorer.graph_data
    nodes = graph.nodes if graph else []
    if not explorer.chat_messages:
        st.info("Ready to analyze graph.")
    for i, message in enumerate(explorer.chat_messages):
        if message.role == "user":
            st.markdown(f"**User:** {message.text}")
            continue
        rendered = render_markdown(message.text, nodes)
        st.markdown(rendered.html, unsafe_allow_html=True)
        if rendered.node_ids and graph:
            columns = st.columns(min(4, len(rendered.node_ids)))
            for j, node_id in enumerate(rendered.node_ids):
                node = graph.node(node_id)
                if node and columns[j % len(columns)].button(node.label, key=f"mention-{i}-{j}"):
                    _click_node(controller, node)
                    st.rerun()
    if explorer.chat_error:
        st.error(explorer.chat_error)
    st.caption("AI can make mistakes. Verify via graph.")
    prompt = st.text_area("Ask about patterns...", value=explorer.chat_input, key=f"chat_input_{len(explorer.chat_messages)}")
    col_send, col_clear = st.columns(2)
    if col_send.button("Send", disabled=explorer.chat_loading):
        with st.spinner("Thinking..."):
            explorer.send_chat(prompt)
        st.rerun()
    if col_clear.button("Clear Chat"):
        explorer.clear_chat()
        st.rerun()


def render_data_tab(explorer: ExplorerState) -> None:
    st.header("Data View")
    graph = explorer.graph_data
    if not graph:
        st.info("No data available. Parse a Turtle dataset first.")
        return
    summary = graph_summary(graph)
    st.markdown(" | ".join(f"**{k.replace('_', ' ').title()}:** {v}" for k, v in summary.items()))
    st.subheader("Graph Nodes")
    df_nodes = nodes_frame(graph)
    st.dataframe(df_nodes)
    st.download_button("Download Nodes as CSV", data=df_nodes.to_csv(index=False).encode("utf-8"),
                       file_name="nodes.csv", mime="text/csv")
    st.subheader("Graph Links")
    df_links = links_frame(graph)
    st.dataframe(df_links)
    st.download_button("Download Links as CSV", data=df_links.to_csv(index=False).encode("utf-8"),
                       file_name="links.csv", mime="text/csv")
    jsonld_str = json.dumps(graph_to_jsonld(graph), indent=2)
    st.download_button("Download Graph Data as JSON-LD", data=jsonld_str, file_name="graph_data.jsonld",
                       mime="application/ld+json")


def main() -> None:
    st.set_page_config(page_title="RDF Explorer", layout="wide")
    st.title("RDF Explorer")
    st.caption("Parse a Turtle dataset, explore it as a graph and ask questions about it.")
    _init_session_state()
    explorer = st.session_state.explorer
    simulation = st.session_state.simulation
    controller = st.session_state.controller

    render_sidebar(explorer, simulation, controller)
    _sync_layout(explorer, simulation, controller)

    tabs = st.tabs(["Graph View", "Assistant", "Data View", "About"])
    with tabs[0]:
        render_graph_tab(explorer, simulation, controller)
    with tabs[1]:
        render_chat_tab(explorer, controller)
    with tabs[2]:
        render_data_tab(explorer)
    with tabs[3]:
        st.header("About RDF Explorer")
        st.markdown(
            """
            Paste RDF in Turtle notation and press **Visualize**. Resources (IRIs and blank nodes)
            become nodes; literal values become node properties; every resource-valued statement
            becomes a link labelled with its predicate.

            - **Graph View:** force-directed layout, node selection with camera focus, manual positioning.
            - **Assistant:** ask questions about the dataset; entities mentioned in answers can be selected.
            - **Data View:** node and link tables with CSV and JSON-LD export.

            Set `GEMINI_API_KEY` to enable the assistant.
            """
        )
