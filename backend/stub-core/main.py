import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException # type: ignore
from pydantic import BaseModel # type: ignore

import config
from adapters.json_adapter import JsonDeclarationAdapter
from engine.eligibility import EligibilityFilter
from engine.errors import CyclicInheritanceError
from engine.flatten import build_template_information
from decl.graph import InheritanceGraph

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Interface Stub Generator (declarations -> flattened stubs)", version="0.1.0")
json_adapter = JsonDeclarationAdapter()

# type text ("List<T>") or {"name": ..., "children": [...]}
TypeRef = Union[str, Dict[str, Any]]

class ArgumentIn(BaseModel):
    name: str
    type: TypeRef

class MarkerIn(BaseModel):
    name: str
    arguments: List[Any] = []

class MethodIn(BaseModel):
    name: str
    generic_parameters: List[str] = []
    arguments: List[ArgumentIn] = []
    return_type: TypeRef = "void"
    markers: List[MarkerIn] = []
    is_dispatchable: Optional[bool] = None

class BaseIn(BaseModel):
    name: str
    type_arguments: List[TypeRef] = []

class UsingIn(BaseModel):
    name: str
    alias: Optional[str] = None
    static: bool = False
    inside_namespace: bool = False

class InterfaceIn(BaseModel):
    name: str
    containing_type: Optional[str] = None
    namespace: Optional[str] = None
    modifiers: List[str] = []
    generic_parameters: List[str] = []
    constraint_clauses: str = ""
    usings: List[UsingIn] = []
    bases: List[BaseIn] = []
    methods: List[MethodIn] = []

class FlattenRequest(BaseModel):
    interfaces: List[InterfaceIn]
    internal_namespace: Optional[str] = None

def _declarations(req: FlattenRequest):
    try:
        return json_adapter.build_declarations(req.model_dump(exclude={"internal_namespace"}))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

@app.get("/health")
def health():
    return {"status": "ok"}

@app.post("/flatten")
def flatten(req: FlattenRequest):
    decls = _declarations(req)
    try:
        info = build_template_information(decls, req.internal_namespace)
    except CyclicInheritanceError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return info.to_debug_json()

@app.post("/eligible")
def eligible(req: FlattenRequest):
    graph = InheritanceGraph(_declarations(req))
    names = [d.name for d in EligibilityFilter(graph).eligible_interfaces()]
    return {"interfaces": names}
