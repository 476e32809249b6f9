from typing import Any, Dict, List, Optional, TypedDict, Union


JSONValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]
Record = Dict[str, JSONValue]
State = Dict[str, Any]  # collection name => list of records, other entries are ignored


class RelationshipDoc(TypedDict):
    field: str
    type: str
    resource: str


class RoutesDoc(TypedDict):
    list: str
    detail: str
    search: str
    filter: str
    expand: List[str]
    embed: List[str]


class ResourceDoc(TypedDict):
    name: str
    count: int
    idField: str
    fields: List[str]
    relationships: List[RelationshipDoc]
    routes: RoutesDoc
    sample: Optional[Record]


class DocumentationView(TypedDict):
    title: str
    version: str
    generatedAt: str
    baseUrl: str
    resources: List[ResourceDoc]
    tips: List[str]
