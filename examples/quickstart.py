import numpy as np
import pandas as pd
from time import perf_counter
from chitree import ChiSquareTreeClassifier, Dataset, enable_logging, run_experiment

# Synthetic categorical data: the label mostly follows "outlook", with noise
rng = np.random.default_rng(42)
n_samples = 600
df = pd.DataFrame({
    "outlook": rng.choice(["sunny", "overcast", "rain"], size=n_samples),
    "humidity": rng.choice(["high", "normal"], size=n_samples),
    "wind": rng.choice(["weak", "strong"], size=n_samples),
})
signal = (df["outlook"] != "sunny") & ((df["humidity"] == "normal") | (df["wind"] == "weak"))
noise = rng.random(n_samples) < 0.15
df["play"] = (signal ^ noise).astype(int)

data = Dataset.from_frame(df, target="play")
idx = rng.permutation(n_samples)
parts = np.array_split(idx, [360, 480])
train, validation, test = (Dataset(data.X[p], data.y[p], data.cardinalities) for p in parts)

t0 = perf_counter()
result = run_experiment(train, validation, test)
print(f"sweep: {perf_counter() - t0:.3f} s")

with enable_logging(level="INFO"):
    clf = ChiSquareTreeClassifier(criterion=result.criterion, p_value=result.best_p_value)
    clf.fit(train)
print(f"test accuracy: {clf.score(test.X, test.y):.3f}")
try:
    print(clf.export_graphviz())
except RuntimeError as e:
    print(f"Skipping Graphviz export: {e}")
