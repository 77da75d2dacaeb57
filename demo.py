#!/usr/bin/env python3
"""
Particle Simulation Demo

Opens a pygame window and runs the attractive particle simulation, on the
Warp device (default) or with the sequential host solver.

Usage:
    python demo.py                          # 500 particles on CUDA
    python demo.py --cpu                    # sequential host solver
    python demo.py --device cpu             # Warp kernel on the CPU device
    python demo.py --particles 200 --seed 1
    python demo.py --headless --steps 300   # no window, statistics only

Controls:
    ESC / close window: quit

Author: NBEL
License: Apache-2.0
"""

import argparse
import threading
import time

from particle_sim import Simulation, SimulationConfig


def parse_args(argv=None):
    defaults = SimulationConfig()
    parser = argparse.ArgumentParser(description='Attractive particle simulation')
    parser.add_argument('--particles', '-n', type=int, default=defaults.num_particles,
                        help=f'Number of particles (default: {defaults.num_particles})')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for the initial configuration')
    parser.add_argument('--dt', type=float, default=defaults.dt,
                        help=f'Time step (default: {defaults.dt})')
    parser.add_argument('--gravity', '-g', type=float, default=defaults.gravitational_constant,
                        help=f'Force constant G (default: {defaults.gravitational_constant})')
    parser.add_argument('--cpu', action='store_true',
                        help='Use the sequential host solver instead of the Warp kernel')
    parser.add_argument('--device', type=str, default=defaults.device,
                        help=f'Warp device for the parallel solver (default: {defaults.device})')
    parser.add_argument('--no-fallback', action='store_true',
                        help='Fail instead of falling back to the host solver when Warp is unavailable')
    parser.add_argument('--dispatch-timeout', type=float, default=None,
                        help='Seconds to wait for one device step before failing')
    parser.add_argument('--window-width', type=int, default=defaults.width,
                        help=f'Window width (default: {defaults.width})')
    parser.add_argument('--window-height', type=int, default=defaults.height,
                        help=f'Window height (default: {defaults.height})')
    parser.add_argument('--frame-delay', type=float, default=defaults.frame_delay,
                        help=f'Sleep between frames in seconds (default: {defaults.frame_delay})')
    parser.add_argument('--steps', type=int, default=None,
                        help='Stop after this many steps (default: run until closed)')
    parser.add_argument('--headless', action='store_true',
                        help='Run without a window')
    parser.add_argument('--quiet', action='store_true',
                        help='Do not print step statistics')
    return parser.parse_args(argv)


def config_from_args(args) -> SimulationConfig:
    return SimulationConfig(
        num_particles=args.particles,
        seed=args.seed,
        dt=args.dt,
        gravitational_constant=args.gravity,
        use_gpu=not args.cpu,
        device=args.device,
        fallback=not args.no_fallback,
        dispatch_timeout=args.dispatch_timeout,
        width=args.window_width,
        height=args.window_height,
        frame_delay=args.frame_delay,
        print_statistics=not args.quiet,
    )


def run_headless(sim: Simulation, steps):
    """Step without rendering; Ctrl+C stops an unbounded run."""
    cancel = threading.Event()
    start_time = time.time()
    try:
        done = sim.run(steps=steps, cancel=cancel)
    except KeyboardInterrupt:
        cancel.set()
        done = sim.step_count
    finally:
        sim.close()
    elapsed = time.time() - start_time
    print(f"✓ {done} steps in {elapsed:.2f}s")
    return done


def run_windowed(sim: Simulation, config: SimulationConfig, steps):
    """Step, render between steps, and pace frames until the window closes."""
    import pygame
    from pygame_renderer import Renderer

    pygame.init()
    screen = pygame.display.set_mode((config.width, config.height))
    pygame.display.set_caption("Particle Simulation")
    renderer = Renderer(window_width=config.width, window_height=config.height)

    cancel = threading.Event()

    def render(s: Simulation):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                cancel.set()
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                cancel.set()

        canvas = renderer.create_canvas()
        renderer.draw_particles(canvas, s.positions())
        renderer.draw_info_text(canvas, [
            (f"Step: {s.step_count}", renderer.GREY),
            (f"Solver: {s.solver.name}", renderer.GREY),
            (f"Step time: {s.last_average_ms:.2f}ms", renderer.GREY),
        ])
        screen.blit(canvas, (0, 0))
        pygame.display.flip()

        if config.frame_delay > 0:
            time.sleep(config.frame_delay)

    try:
        return sim.run(steps=steps, cancel=cancel, on_step=render)
    finally:
        pygame.quit()
        sim.close()


def main(argv=None):
    args = parse_args(argv)
    config = config_from_args(args)

    print("=" * 60)
    print("Particle Simulation")
    print("=" * 60)
    print(f"  Particles: {config.num_particles}")
    print(f"  dt: {config.dt}, G: {config.gravitational_constant}")
    print(f"  Backend: {config.backend} ({config.device})")

    sim = Simulation.from_config(config)

    if args.headless:
        run_headless(sim, args.steps)
    else:
        run_windowed(sim, config, args.steps)


if __name__ == "__main__":
    main()
