"""Format tutor math in one call, with no config and no dependencies."""

from olytutor import format_math

print(format_math(r"If $a_1 = 2$ and $a_{n+1} = a_n^2$, then $a_3 \geq 16$."))
