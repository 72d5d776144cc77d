from js2ts.lang.typescript import (
    TS_LANGUAGE,
    TSX_LANGUAGE,
    ProgramBuilder,
    get_node_text,
    parse_declarations,
    parse_module,
    render_declaration,
)
