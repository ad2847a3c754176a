import sys
from time import perf_counter

from mushtree import (
    ATTRIBUTE_NAMES,
    SplitMetricsRecorder,
    build_tree_with_telemetry,
    enable_logging,
    evaluate,
    load_records,
    split_train_test,
)

path = sys.argv[1] if len(sys.argv) > 1 else "mushroom.csv"

with enable_logging(level="INFO"):
    records = load_records(path)
    train, test = split_train_test(records, 0.6, random_state=42)

# hold a slice of the training data back for pruning
train, validation = train[: int(len(train) * 0.8)], train[int(len(train) * 0.8):]

for use_gain_ratio in (False, True):
    name = "gain ratio" if use_gain_ratio else "information gain"
    recorder = SplitMetricsRecorder()

    t0 = perf_counter()
    tree = build_tree_with_telemetry(train, ATTRIBUTE_NAMES, use_gain_ratio, recorder)
    print(f"\n== {name} ==  build: {perf_counter()-t0:.3f} s")
    print(tree.render(), end="")

    print(recorder.gain_table().to_string(index=False))
    print(recorder.entropy_table().to_string(index=False))

    print("training:", evaluate(tree, train))
    print("testing: ", evaluate(tree, test))

    tree.prune(validation)
    print(f"after pruning: {tree.get_n_leaves()} leaves, depth {tree.get_depth()}")
    print("testing: ", evaluate(tree, test))

    try:
        tree.export_graphviz(f"mushroom_tree_{'gr' if use_gain_ratio else 'ig'}", format="dot")
    except RuntimeError as e:
        print(f"Skipping Graphviz export: {e}")
