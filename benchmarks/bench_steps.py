"""
Microbenchmark: time per step vs number of bodies (O(N²) gravity pass).
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from planet_sim import Simulation
from planet_sim.profiler import Profiler

def run(n: int, integrator: str, steps: int = 100):
    prof = Profiler()
    sim = Simulation(dt=1e-3, model="gravity", integrator=integrator, seed=12345, profiler=prof)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)

    # scatter bodies on a disc with small random velocities
    for _ in range(n):
        r = 100.0 * np.sqrt(rng.uniform())
        theta = rng.uniform(0.0, 2 * np.pi)
        sim.add(r * np.cos(theta), r * np.sin(theta),
                vx=0.1 * float(rng.normal()), vy=0.1 * float(rng.normal()),
                mass=float(rng.uniform(1e8, 1e10)))

    # warmup
    sim.run(5)
    prof.stats.clear()

    t0 = time.perf_counter()
    sim.run(steps)
    t1 = time.perf_counter()

    per_step = (t1 - t0) / steps
    return per_step, prof.stats.summary()

if __name__ == "__main__":
    for integrator in ["euler", "verlet"]:
        for n in [10, 50, 100, 250]:
            per_step, summary = run(n, integrator)
            print(f"{integrator:6s} N={n:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
            for k in ["integrate", "trails"]:
                if k in summary:
                    print(" ", k, summary[k])
        print()
