from collections import Counter, deque
from typing import Any, Dict, Iterable, List, Set

# step id -> ids of the steps it connects to
StepGraph = Dict[str, List[str]]


class ValidationService:
    """
    Structural checks for a step graph.

    Saving a workflow never runs these checks; they back the editor's
    ``validate()`` and the advisory validate endpoint. Problems are reported
    in this order: step ids, connections, start/end steps, per-step paths,
    cycles.
    """

    @staticmethod
    def _label(step: Dict[str, Any]) -> str:
        return (step.get("data") or {}).get("label") or step["id"]

    @staticmethod
    def _walk(graph: StepGraph, roots: Iterable[str]) -> Set[str]:
        seen: Set[str] = set()
        queue = deque(roots)
        while queue:
            curr = queue.popleft()
            if curr in seen:
                continue
            seen.add(curr)
            queue.extend(graph.get(curr, []))
        return seen

    @staticmethod
    def _has_cycle(graph: StepGraph) -> bool:
        # Kahn's algorithm: anything never freed sits on or behind a cycle
        in_degree = dict.fromkeys(graph, 0)
        for targets in graph.values():
            for target in targets:
                in_degree[target] += 1
        ready = deque(step_id for step_id, degree in in_degree.items() if degree == 0)
        freed = 0
        while ready:
            curr = ready.popleft()
            freed += 1
            for target in graph[curr]:
                in_degree[target] -= 1
                if in_degree[target] == 0:
                    ready.append(target)
        return freed < len(graph)

    @staticmethod
    def validate_workflow(steps: List[Dict[str, Any]], connections: List[Dict[str, Any]]) -> List[str]:
        errors = []

        ids = [s["id"] for s in steps]
        for step_id, count in Counter(ids).items():
            if count > 1:
                errors.append(f"Step id '{step_id}' is used more than once")

        forward: StepGraph = {step_id: [] for step_id in ids}
        backward: StepGraph = {step_id: [] for step_id in ids}
        for conn in connections:
            source, target = conn["source"], conn["target"]
            if source not in forward or target not in forward:
                errors.append(f"Connection {source} -> {target} points to a missing step")
                continue
            forward[source].append(target)
            backward[target].append(source)

        starts = [s for s in steps if s.get("type") == "start"]
        ends = [s for s in steps if s.get("type") == "end"]
        if not starts:
            errors.append("Missing start step")
        elif len(starts) > 1:
            errors.append(f"Only one start step is allowed, found {len(starts)}")
        if not ends:
            errors.append("Missing end step")

        if not starts:
            return errors

        from_start = ValidationService._walk(forward, [starts[0]["id"]])
        to_end = ValidationService._walk(backward, [s["id"] for s in ends])
        for s in steps:
            label = ValidationService._label(s)
            if s["id"] not in from_start:
                errors.append(f"Step '{label}' cannot be reached from the start step")
            if s["id"] not in to_end:
                errors.append(f"Step '{label}' has no path to an end step")

        if ValidationService._has_cycle(forward):
            errors.append("Workflow contains a cycle")

        return errors
