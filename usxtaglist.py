#!/usr/bin/env python3

"""
List usx tags.

A simple script to generate a list of usx elements and styles that were
used in one or more usx files, split into the ones that usx2usfx.py knows
how to convert and the ones it doesn't. Requires python3 and lxml.

This script is public domain.

"""

import argparse
import collections
import glob
from typing import Counter, Mapping

import lxml.etree as et  # nosec

from usx2usfx import LOG, START, UsxReader, UsxTag

# -------------------------------------------------------------------------- #

VERSION = "1.0.0"

# -------------------------------------------------------------------------- #

# set of usx element names that usx2usfx.py converts
KNOWNTAGS = {_.value for _ in UsxTag}


def styletag(name: str, attrib: Mapping[str, str]) -> str:
    """Return element name and style as name@style."""
    style = attrib.get("style")
    return name if style is None else f"{name}@{style}"


def gettags(fname: str) -> Counter[str]:
    """Count element names and element styles in a usx file."""
    counttags: Counter[str] = collections.Counter()
    with UsxReader(fname) as usx:
        while True:
            event = usx.read()
            if event is None:
                break
            if event.kind == START:
                counttags[event.name] += 1
                if "style" in event.attrib:
                    counttags[styletag(event.name, event.attrib)] += 1
    return counttags


def processtags(fnames: list[str], tcounts: bool) -> None:
    """Process usx tags in all files."""
    counttags: Counter[str] = collections.Counter()

    filenames = []
    for _ in fnames:
        if "*" in _:
            filenames.extend(glob.glob(_))
        else:
            filenames.append(_)

    for fname in filenames:
        try:
            counttags.update(gettags(fname))
        except (et.LxmlError, OSError) as err:
            LOG.error("Error reading %s", fname)
            LOG.error("    %s", err)

    # split tags into known and unknown sets
    elements = {_ for _ in counttags if "@" not in _}
    styles = {_ for _ in counttags if "@" in _}
    knownset = elements.intersection(KNOWNTAGS)
    unknownset = elements.difference(KNOWNTAGS)

    # output results.
    print()
    if knownset:
        print(f"Known USX Elements: {', '.join(sorted(knownset))}\n")
    if unknownset:
        print(f"Unrecognized USX Elements: {', '.join(sorted(unknownset))}\n")
    if styles:
        print(f"Styles: {', '.join(sorted(styles))}\n")

    # print tag usage counts
    if tcounts:
        print("\nTag usage count:\n")
        for i in sorted(counttags):
            print(f"{counttags[i]: 8} - {i}")
        print(f"\nTotal number of usx elements found:   {sum(counttags[_] for _ in elements)}\n")


# -------------------------------------------------------------------------- #


if __name__ == "__main__":
    PARSER = argparse.ArgumentParser(
        description="""
            A simple script to generate a list of usx elements and styles
            that were used in one or more usx files.
        """,
        epilog=f"""
            * Version: {VERSION} * This script is public domain *
        """,
    )
    PARSER.add_argument(
        "-c", help="include usage counts for tags", action="store_true"
    )
    PARSER.add_argument(
        "file", help="name of file to process (wildcards allowed)", nargs="+"
    )
    ARGS = PARSER.parse_args()

    processtags(ARGS.file, ARGS.c)
