"""Demonstrates building, printing, pruning, and querying a TextClassifier.

A CountVectorizer and DecisionTreeClassifier are fitted with sklearn, then
handed to textclf through its adapters. Logging is disabled by default; here it
is enabled at DEBUG level so tree construction and pruning are reported.
"""

from sklearn.feature_extraction.text import CountVectorizer
from sklearn.tree import DecisionTreeClassifier

from textclf import TextClassifier, enable_logging
from textclf.tree.adapters import SklearnTreeSplitter, SklearnVectorizer

comments = [
    "you are an idiot",
    "what a lovely photo",
    "idiot idiot idiot",
    "thanks for sharing this",
    "this is stupid and you are stupid",
    "lovely work, thanks",
    "stupid idea from an idiot",
    "great idea, thanks for the photo",
]
toxic = [True, False, True, False, True, False, True, False]

counts = CountVectorizer().fit(comments)
fitted = DecisionTreeClassifier(random_state=0).fit(counts.transform(comments), toxic)

with enable_logging(level="DEBUG"):
    vectorizer = SklearnVectorizer(counts)
    classifier = TextClassifier(
        vectorizer,
        SklearnTreeSplitter(fitted, feature_names=vectorizer.feature_names),
    )

    print(f"Depth {classifier.depth}, {classifier.leaf_count} leaves")
    classifier.print()

    for text in ["What an idiot", "Lovely photo, thanks!"]:
        print(f"{text!r} -> toxic={classifier.classify(text)}")

    classifier.prune(1)
    classifier.print()

    for rule in classifier.rules():
        print(rule)
