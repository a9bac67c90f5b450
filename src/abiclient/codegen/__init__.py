"""Analysis of contract abis into client definitions, and rendering them as python source."""

from .classify import MethodKind, classify
from .emit import ClientDefinition, MethodDefinition, build_client_definition, emit_client_definition
from .format import avoid_python_keywords, capitalize_first_letter_only, format_code, write_code
from .render import client_module_path, generate_client_from_file, render_client_source, setup_templates
from .signature import (
    MUTATION_OPTIONS,
    QUERY_OPTIONS,
    OutputField,
    OutputPlan,
    OutputShape,
    ParamPlan,
    SignaturePlan,
    plan_output,
    plan_signature,
)
from .types import PrimitiveType, solidity_to_primitive_type, solidity_to_python_type
