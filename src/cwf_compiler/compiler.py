"""Drive one compilation: parse a unit and write its artifacts as it goes."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from cwf_compiler.errors import CompileError
from cwf_compiler.generator.datahandler_generator import write_datahandler
from cwf_compiler.generator.wsdl_generator import write_wsdl
from cwf_compiler.generator.xsd_generator import write_xsd
from cwf_compiler.models import Message, Operation
from cwf_compiler.parser.cwf_parser import CwfParser
from cwf_compiler.parser.tokenizer import TokenType


class ArtifactWriter:
    """Writes artifacts in the order the parser completes them.

    A bare message unit is written to ``standalone_xsd`` instead of
    ``<Message>.xsd``.
    """

    def __init__(self, output_dir: str, standalone_xsd: Optional[str] = None):
        self.output_dir = output_dir
        self.standalone_xsd = standalone_xsd
        self.generated: List[str] = []

    def on_message(self, message: Message) -> None:
        if self.standalone_xsd is not None:
            path = write_xsd(message, self.output_dir, file_name=self.standalone_xsd)
        else:
            path = write_xsd(message, self.output_dir)
        self.generated.append(path)

    def on_operation(self, operation: Operation) -> None:
        self.generated.append(write_wsdl(operation, self.output_dir))
        self.generated.append(write_datahandler(operation, self.output_dir))


def compile_source(text: str, source_name: str = "", output_dir: str = ".") -> List[str]:
    """Compile one source unit and return the generated file paths in order."""
    writer = ArtifactWriter(output_dir)
    parser = CwfParser(
        text,
        source_name,
        on_message=writer.on_message,
        on_operation=writer.on_operation,
    )
    if parser.lookahead.type == TokenType.MESSAGE:
        writer.standalone_xsd = f"{source_name or 'message'}.xsd"
    parser.parse()
    return writer.generated


def run(source_path: str, output_dir: str = ".") -> List[str]:
    """Read ``source_path`` and compile it into ``output_dir``."""
    try:
        text = Path(source_path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise CompileError(f"opening file:{source_path}: {e}") from e
    return compile_source(text, source_path, output_dir)
