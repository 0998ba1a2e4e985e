import logging
from typing import List

import networkx as nx

from scanner.dom.models import MarkupIndex, ReferenceGraph, GraphNode, GraphEdge
from scanner.script.extractor import SelectorReference

logger = logging.getLogger(__name__)


class GraphService:
    """
    Builds the bipartite reference graph between script references and markup selectors.

    Script-side nodes are one per reference occurrence ('script:<i>'), markup-side
    nodes one per distinct target key ('markup:<key>'). Only topology is produced;
    placing the nodes is left to whatever renders the graph.
    """

    def __init__(self, index: MarkupIndex):
        self.index = index

    def build(self, references: List[SelectorReference]) -> ReferenceGraph:
        # DiGraph keeps nodes and edges in insertion order
        graph = nx.DiGraph()

        for ref in references:
            key = ref.key
            script_id = f"script:{ref.ordinal_index}"
            graph.add_node(script_id, label=key, side="script")

            ok = self.index.lookup(key)
            if ok is None:
                continue

            markup_id = f"markup:{key}"
            if markup_id not in graph:
                graph.add_node(markup_id, label=key, side="markup")
            graph.add_edge(script_id, markup_id, ok=ok)

        logger.debug("Reference graph: %d nodes, %d edges", graph.number_of_nodes(), graph.number_of_edges())
        return self._to_model(graph)

    @staticmethod
    def _to_model(graph: nx.DiGraph) -> ReferenceGraph:
        nodes = [
            GraphNode(id=node_id, label=data["label"], side=data["side"])
            for node_id, data in graph.nodes(data=True)
        ]
        edges = [
            GraphEdge(source=source, target=target, ok=data["ok"])
            for source, target, data in graph.edges(data=True)
        ]
        return ReferenceGraph(nodes=nodes, edges=edges)
