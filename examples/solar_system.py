# examples/solar_system.py
import logging
import math

import numpy as np

from planet_sim import Simulation
from planet_sim.core.invariants import linear_momentum

logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

G = 6.67408e-11
M_SUN = 1e13

sim = Simulation(dt=1e-3, model="gravity", integrator="verlet", seed=42)
sim.add(0.0, 0.0, mass=M_SUN, radius=2.0, name="Sun")

for name, r, m in [("Inner", 20.0, 1e9), ("Middle", 45.0, 5e9), ("Outer", 80.0, 2e9)]:
    v = math.sqrt(G * M_SUN / r)
    sim.add(r, 0.0, vy=v, mass=m, radius=0.5, name=name)

released = []
sim.add_removal_listener(lambda index, snap: released.append(snap.name))

p0 = linear_momentum(sim.snapshots())
sim.run(5000)
p1 = linear_momentum(sim.snapshots())

for snap in sim.snapshots():
    print(f"{snap.name:>7}: pos={np.round(snap.position, 3)} trail={len(snap.trail)}")
print("momentum drift:", np.linalg.norm(p1 - p0))

sim.remove(3)
print("released:", released, "remaining:", sim.count)
