"""${field} substitution for post URL and output filename templates"""

import re
from typing import Any, Mapping


TOKEN_RE = re.compile(r"\$\{([^}]*)\}")


def fill_template(template: str, fields: Mapping[str, Any]) -> str:
    """Replace each ${name} with str(fields[name]); unknown tokens stay literal."""
    def repl(m: re.Match) -> str:
        key = m.group(1)
        return str(fields[key]) if key in fields else m.group(0)

    return TOKEN_RE.sub(repl, template)
