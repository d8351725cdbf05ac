#!/usr/bin/env python3
"""
Quick Start - evolve the weights of a tiny XOR network with CNE.

Run this script to watch the population converge and save a fitness plot.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from loguru import logger

from cne.evolution import CNE, CNEConfig, ProgressCallback
from cne.visualization import plot_fitness_history, save_figure

# XOR truth table
X = np.array([[0, 0], [0, 1], [1, 0], [1, 1]], dtype=float)
y = np.array([0, 1, 1, 0], dtype=float)


def xor_loss(weights: np.ndarray) -> float:
    """Mean squared error of a 2-2-1 tanh/sigmoid network packed in 9 weights."""
    w = weights.ravel()
    W1, b1 = w[0:4].reshape(2, 2), w[4:6]
    W2, b2 = w[6:8], w[8]
    hidden = np.tanh(X @ W1 + b1)
    output = 1.0 / (1.0 + np.exp(-(hidden @ W2 + b2)))
    return float(np.mean((output - y) ** 2))


def report(generation, max_generations, stats):
    if generation % 50 == 0:
        print(f"  gen {generation:4d}/{max_generations}  best={stats['best_fitness']:.5f}")


logger.remove()
logger.add(sys.stderr, level="INFO")

print("CNE - Quick Start")
print("=" * 40)

config = CNEConfig(
    population_size=200,
    max_generations=500,
    mutation_prob=0.2,
    mutation_size=0.1,
    select_percent=0.2,
    tolerance=-1,  # run all generations
)
optimizer = CNE(config, seed=7)

weights = np.zeros((9, 1))
result = optimizer.run(xor_loss, weights, callbacks=[ProgressCallback(report)])

print()
print(result.summary())

hidden = np.tanh(X @ weights.ravel()[0:4].reshape(2, 2) + weights.ravel()[4:6])
logits = hidden @ weights.ravel()[6:8] + weights.ravel()[8]
print(f"\nPredictions: {np.round(1.0 / (1.0 + np.exp(-logits)), 3)}")

path = save_figure(plot_fitness_history(result.history, title='XOR weights'), 'xor_fitness.png')
print(f"Saved: {path}")
