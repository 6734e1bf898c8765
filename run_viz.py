from learn_to_fly.simulation import SimulationConfig
from learn_to_fly.viewer import run_live

if __name__ == "__main__":
    # Watch the flock learn; R restarts from scratch, E forces a new generation.
    run_live(SimulationConfig(animals=30, foods=50, generation_length=1500), seed=21, fps=60, steps_per_frame=4)
