import math

import pyplotter

xs = [i / 50 for i in range(0, 501)]
pyplotter.title("Damped wave")
pyplotter.xlim(0, 10)
pyplotter.ylim(-1, 1)
pyplotter.plot(xs, [math.exp(-0.3 * x) * math.cos(2 * x) for x in xs], label="exp(-0.3x) cos(2x)")
