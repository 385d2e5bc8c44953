from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from cwf_compiler.compiler import run
from cwf_compiler.errors import CompileError


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Compile a CWF record description into XSD, WSDL and a Java DataHandler",
    )
    parser.add_argument(
        "source",
        help="Path to a .cwf file holding one operation or one message",
    )

    args = parser.parse_args(argv)

    try:
        generated = run(args.source)
    except CompileError as e:
        print(f"FATAL: {e}")
        sys.exit(1)
    except OSError as e:
        print(f"FATAL: opening file:{args.source}: {e}")
        sys.exit(1)

    for f in generated:
        print(f"  Generated: {f}")
    print("Done!")
