# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import shlex
from pathlib import Path

from jinja2 import Environment
from jinja2 import FileSystemLoader
from jinja2 import StrictUndefined


def render(template_name: str, **context) -> str:
    return _environment.get_template(template_name).render(**context)


# Generated files are shell scripts and unit files, not HTML: no autoescape.
_environment = Environment(
    loader=FileSystemLoader(Path(__file__).with_name('templates')),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
    )
_environment.filters['quote'] = shlex.quote
