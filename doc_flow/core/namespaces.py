"""
Groups function docs by namespace and orders each namespace's members.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional

from .models import FunctionDoc, NamespaceInfo

logger = logging.getLogger(__name__)

PRIVATE_NAMESPACE = "[private]"


def namespace_key(doc: FunctionDoc) -> str:
    """Private docs group together; everything else by namespace, or as its own root."""
    if doc.is_private:
        return PRIVATE_NAMESPACE
    return doc.namespace or doc.short_name


def group_by_namespace(docs: Iterable[FunctionDoc]) -> Dict[str, List[FunctionDoc]]:
    groups: Dict[str, List[FunctionDoc]] = {}
    for doc in docs:
        groups.setdefault(namespace_key(doc), []).append(doc)
    return groups


def member_sort_key(doc: FunctionDoc):
    # Static members first, then instance members; alphabetical within each tier.
    return (not doc.is_static, doc.short_name)


def create_namespace_info(groups: Dict[str, List[FunctionDoc]], namespace: str) -> NamespaceInfo:
    """
    Builds one namespace: its constructor (any doc named exactly like the
    namespace), members sorted statics-first, and its private members.
    """
    constructor = next(
        (doc for docs in groups.values() for doc in docs if doc.name == namespace),
        None,
    )
    members = sorted(
        (doc for doc in groups.get(namespace, []) if doc.name != namespace),
        key=member_sort_key,
    )
    all_members = ([constructor] if constructor is not None else []) + members
    private_members = sorted((doc for doc in all_members if doc.is_private), key=lambda doc: doc.name)

    for member in all_members:
        member.section_type = "constructor" if member.is_constructor else "method"

    return NamespaceInfo(
        namespace=namespace,
        constructor_method=constructor,
        members=members,
        private_members=private_members,
        all_members=all_members,
        has_examples=any(member.has_examples for member in all_members),
        has_benchmarks=any(member.has_benchmarks for member in all_members),
        exclude_from_docs=(namespace == PRIVATE_NAMESPACE) or all(m.exclude_from_docs for m in all_members),
    )


def aggregate_namespaces(docs: List[FunctionDoc], namespaces: Optional[List[str]] = None) -> List[NamespaceInfo]:
    """
    Aggregates ``docs`` into the requested namespaces, or every namespace found
    (sorted) when none are requested.
    """
    groups = group_by_namespace(docs)
    wanted = list(namespaces) if namespaces else sorted(groups)
    result = [create_namespace_info(groups, namespace) for namespace in wanted]
    logger.debug(f"Aggregated {len(docs)} doc(s) into {len(result)} namespace(s)")
    return result


def elevate_private_members(namespaces: List[NamespaceInfo], docs: List[FunctionDoc]) -> List[FunctionDoc]:
    """
    Collects every namespace's private members and gives each the docs that
    live in its own namespace, so private helper classes can be documented
    and tested along with their methods.
    """
    private_members: List[FunctionDoc] = []
    seen = set()
    # A private constructor is listed both under its own namespace and under [private].
    for member in (member for info in namespaces for member in info.private_members):
        if id(member) not in seen:
            seen.add(id(member))
            private_members.append(member)
    for member in private_members:
        member.methods = [doc for doc in docs if doc.namespace == member.short_name]
    return private_members


def apply_grep(namespaces: List[NamespaceInfo], docs: List[FunctionDoc], pattern: str) -> List[FunctionDoc]:
    """Keeps only members whose name matches ``pattern``; returns the filtered doc list."""
    regex = re.compile(pattern)
    for info in namespaces:
        info.all_members = [member for member in info.all_members if regex.search(member.name)]
        info.has_examples = any(member.has_examples for member in info.all_members)
    return [doc for doc in docs if regex.search(doc.name)]
