# examples/harmonic_oscillator.py
import math

from planet_sim import Simulation

sim = Simulation(dt=1e-3, model="restoring", integrator="verlet")
i = sim.add(1.0, 0.0, name="bob")

period = 2 * math.pi
while sim.time < period:
    sim.step()

print("t:", sim.time)
print("pos:", sim.position(i), "(expected ~[1, 0])")
print("trail samples:", len(sim.snapshot(i).trail))
