from __future__ import annotations

import os
from pathlib import Path
from typing import Dict

from cwf_compiler.errors import EmitError
from cwf_compiler.models import Operation, TypeTag

from .templating import DEFAULT_NAMESPACE_BASE, get_template_env

DEFAULT_JAVA_PACKAGE = "ice"

# CWF type -> DataObject accessor suffix (getInt, getFloat, getString)
JAVA_ACCESSOR_MAP: Dict[TypeTag, str] = {
    TypeTag.INT: "Int",
    TypeTag.DECIMAL: "Float",
    TypeTag.STRING: "String",
}


def java_string_literal(text: str) -> str:
    """Quote ``text`` as a Java string literal."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _java_accessor(type_tag: TypeTag) -> str:
    return JAVA_ACCESSOR_MAP[type_tag]


def datahandler_class_name(operation: Operation) -> str:
    return f"{operation.name}DH"


def generate_datahandler(
    operation: Operation,
    java_package: str = DEFAULT_JAVA_PACKAGE,
    namespace_base: str = DEFAULT_NAMESPACE_BASE,
) -> str:
    """Generate the Java DataHandler converting CWF records for an operation.

    Incoming records are unpacked field by field into an XML document of the
    input message type; outgoing DataObjects are packed with the output
    message's fixed-width format.
    """
    env = get_template_env()
    env.filters["java_accessor"] = _java_accessor
    template = env.get_template("datahandler.java.j2")

    return template.render(
        java_package=java_package,
        class_name=datahandler_class_name(operation),
        input_name=operation.input.name,
        input_namespace=f"{namespace_base}{operation.input.name}",
        input_fields=operation.input.fields,
        input_length=operation.input.length,
        output_fields=operation.output.fields,
        output_format=java_string_literal(operation.output.pack_format()),
    )


def write_datahandler(
    operation: Operation,
    output_dir: str,
    java_package: str = DEFAULT_JAVA_PACKAGE,
    namespace_base: str = DEFAULT_NAMESPACE_BASE,
) -> str:
    """Write ``<Operation>DH.java`` and return its path."""
    source = generate_datahandler(operation, java_package, namespace_base)
    file_path = os.path.join(output_dir, f"{datahandler_class_name(operation)}.java")
    try:
        Path(file_path).write_text(source, encoding="utf-8")
    except OSError as e:
        raise EmitError(file_path, e) from e
    return file_path
