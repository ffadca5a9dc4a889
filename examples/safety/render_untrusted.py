"""Escape-then-format pipeline for text you did not write.

format_math() copies plain text verbatim. When the text comes from a user or
a model response, escape it first with render_safe().

Run::

    python examples/safety/render_untrusted.py

"""

from olytutor import format_math, render_safe

raw = "Try <img src=x onerror=alert(1)> with $x \\in \\mathbb{R}$ and $$\\sum x_i$$."

print("=== format_math (trusted input only) ===")
print(format_math(raw))
print()

print("=== render_safe ===")
print(render_safe(raw))
