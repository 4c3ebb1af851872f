from engine.enums import DependencyKind
from engine.graph.models import DependencyFact


def fact(source, target, kind=DependencyKind.docker_depends_on, **metadata):
    return DependencyFact(source=source, target=target, kind=kind, metadata=metadata)
