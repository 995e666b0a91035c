#!/usr/bin/env python3

r"""
Convert usx bibles to usfx.

Notes:
   * all files with a .usx extension in the given directory, and in the
     directories one level below it, are converted into a single usfx
     file. The extra level allows an unzipped DBL bundle to be placed
     into the usx directory as is.

   * a book that has already been converted is skipped when it shows up
     again later in the run. This happens when overlapping canon sets are
     present in a bundle.

   * usx 3 end milestones (eid attributes on chapter and verse) are
     dropped since usfx does not use them.

   * paragraphs with the restore style are dropped along with everything
     inside of them.

   * no attempt is made to validate the usx input. A file that is not
     well formed xml is reported and skipped. Anything written for that
     file before the error was found is kept.

This script is public domain. You may do whatever you want with it.

"""

# make pylint happier..
# pylint: disable=too-many-instance-attributes
# pylint: disable=too-many-branches

import logging
import os.path
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser
from collections import deque
from enum import Enum
from sys import exit as sysexit
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple

import lxml.etree as et  # nosec

# -------------------------------------------------------------------------- #

META = {
    "USX": "3.0",  # Targeted USX version
    "USFX": "2.0",  # Targeted USFX version
    "VERSION": "0.3",  # THIS SCRIPT version
    "DATE": "2026-10-17",  # THIS SCRIPT revision date
}

# -------------------------------------------------------------------------- #

USXEXT = ".usx"

# a reference target must be longer than this to be written.
# (3 letter book code, 2 single digit numbers, and 2 dots is 8 characters.)
MINREFLEN = 6

# number of bytes fed to the usx parser at a time
CHUNKSIZE = 65536

XSINS = "http://www.w3.org/2001/XMLSchema-instance"
XMLSPACE = "{http://www.w3.org/XML/1998/namespace}space"
USFXSCHEMALOC = "usfx.xsd"

# -------------------------------------------------------------------------- #

# usfm/usx book codes
KNOWNBOOKS = frozenset(
    [
        # old testament books
        "GEN", "EXO", "LEV", "NUM", "DEU", "JOS", "JDG", "RUT", "1SA",
        "2SA", "1KI", "2KI", "1CH", "2CH", "EZR", "NEH", "EST", "JOB",
        "PSA", "PRO", "ECC", "SNG", "ISA", "JER", "LAM", "EZK", "DAN",
        "HOS", "JOL", "AMO", "OBA", "JON", "MIC", "NAM", "HAB", "ZEP",
        "HAG", "ZEC", "MAL",
        # new testament books
        "MAT", "MRK", "LUK", "JHN", "ACT", "ROM", "1CO", "2CO", "GAL",
        "EPH", "PHP", "COL", "1TH", "2TH", "1TI", "2TI", "TIT", "PHM",
        "HEB", "JAS", "1PE", "2PE", "1JN", "2JN", "3JN", "JUD", "REV",
        # other books
        "TOB", "JDT", "ESG", "WIS", "SIR", "BAR", "LJE", "S3Y", "SUS",
        "BEL", "1MA", "2MA", "3MA", "4MA", "1ES", "2ES", "MAN", "PS2",
        "ODA", "PSS", "EZA", "5EZ", "6EZ", "DAG", "PS3", "2BA", "LBA",
        "JUB", "ENO", "1MQ", "2MQ", "3MQ", "REP", "4BA", "LAO",
        # private use
        "XXA", "XXB", "XXC", "XXD", "XXE", "XXF", "XXG",
        # Peripheral books
        "FRT", "INT", "BAK", "CNC", "GLO", "TDX", "NDX", "OTH",
    ]
)

# -------------------------------------------------------------------------- #
# TAG MAPPINGS


class UsxTag(Enum):
    """Usx elements handled by the converter."""

    USX = "usx"
    BOOK = "book"
    CHAPTER = "chapter"
    VERSE = "verse"
    NOTE = "note"
    CHAR = "char"
    TABLE = "table"
    ROW = "row"
    CELL = "cell"
    PARA = "para"
    FIGURE = "figure"
    OPTBREAK = "optbreak"
    REF = "ref"


class ParaStyle(Enum):
    """Para base styles (style minus any trailing level number) with special handling."""

    HEADING = "h"
    TOC = "toc"
    PARAGRAPH = "p"
    QUOTE = "q"
    DESCRIPTION = "d"
    SECTION = "s"
    MAJORTITLE = "mt"
    RESTORE = "restore"


# para styles that keep their own name in usfx
BODYSTYLES = {
    ParaStyle.PARAGRAPH,
    ParaStyle.QUOTE,
    ParaStyle.DESCRIPTION,
    ParaStyle.SECTION,
    ParaStyle.MAJORTITLE,
}

# figure attributes and the usfx elements that hold them
FIGUREPARTS = (
    ("desc", "description"),
    ("file", "catalog"),
    ("size", "size"),
    ("loc", "location"),
    ("copy", "copyright"),
    ("ref", "reference"),
)

# -------------------------------------------------------------------------- #

# logging.basicConfig(format="%(levelname)s: %(message)s")
logging.basicConfig(format="%(message)s")
LOG = logging.getLogger(__name__)
LOG.setLevel(logging.WARNING)

# -------------------------------------------------------------------------- #
# READING USX

START = "start"
END = "end"
TEXT = "text"
WHITESPACE = "whitespace"


class UsxEvent(NamedTuple):
    """A single parse event from a usx file."""

    kind: str
    name: str = ""
    attrib: Mapping[str, str] = MappingProxyType({})
    empty: bool = False
    value: str = ""


class _UsxTarget:
    """Parser target that queues usx events in document order."""

    def __init__(self) -> None:
        self.events: deque[UsxEvent] = deque()
        self.textbuf: list[str] = []
        self.preserve = [False]

    def flushtext(self) -> None:
        """Queue any character data collected since the last tag."""
        if not self.textbuf:
            return
        text = "".join(self.textbuf)
        self.textbuf = []
        if text.strip():
            self.events.append(UsxEvent(TEXT, value=text))
        elif self.preserve[-1]:
            self.events.append(UsxEvent(WHITESPACE, value=text))

    def start(self, tag: str, attrib: Any) -> None:
        self.flushtext()
        space = attrib.get(XMLSPACE)
        self.preserve.append(
            self.preserve[-1] if space is None else space == "preserve"
        )
        self.events.append(UsxEvent(START, tag, dict(attrib)))

    def end(self, tag: str) -> None:
        self.flushtext()
        self.preserve.pop()
        self.events.append(UsxEvent(END, tag))

    def data(self, data: str) -> None:
        self.textbuf.append(data)

    def close(self) -> None:
        self.flushtext()


class UsxReader:
    """
    Pull parse events from one usx file.

    The file is fed to lxml in chunks so only a small part of the
    document is held in memory. An element with no content is returned
    as a single start event with empty set to True. No end event is
    returned for it.

    """

    def __init__(self, source: Any, chunksize: int = CHUNKSIZE) -> None:
        self.chunksize = chunksize
        if hasattr(source, "read"):
            self._file = source
            self._ownfile = False
        else:
            self._file = open(source, "rb")  # pylint: disable=consider-using-with
            self._ownfile = True
        self._target = _UsxTarget()
        self._parser = et.XMLParser(
            target=self._target, resolve_entities=False, no_network=True
        )
        self._done = False
        self._lookahead: UsxEvent | None = None

    def __enter__(self) -> "UsxReader":
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the usx file if we opened it."""
        if self._ownfile:
            self._file.close()

    def _fill(self, count: int) -> bool:
        """Feed the parser until count events are queued or the input runs out."""
        events = self._target.events
        while len(events) < count and not self._done:
            chunk = self._file.read(self.chunksize)
            if chunk:
                self._parser.feed(chunk)
            else:
                self._done = True
                self._parser.close()
        return len(events) >= count

    def _pull(self) -> UsxEvent | None:
        if not self._fill(1):
            return None
        event = self._target.events.popleft()
        if event.kind == START and self._fill(1):
            # nothing was queued between this start and the next end,
            # so that end must belong to this element.
            if self._target.events[0].kind == END:
                self._target.events.popleft()
                event = event._replace(empty=True)
        return event

    def read(self) -> UsxEvent | None:
        """Return the next event, or None at the end of the file."""
        if self._lookahead is not None:
            event, self._lookahead = self._lookahead, None
            return event
        return self._pull()

    def peek(self) -> UsxEvent | None:
        """Return the next event without consuming it."""
        if self._lookahead is None:
            self._lookahead = self._pull()
        return self._lookahead

    def skipelement(self) -> None:
        """Discard everything up to and including the end of the element just read."""
        depth = 1
        while depth:
            event = self.read()
            if event is None:
                break
            if event.kind == START and not event.empty:
                depth += 1
            elif event.kind == END:
                depth -= 1


# -------------------------------------------------------------------------- #
# WRITING USFX


class UsfxWriterError(RuntimeError):
    """Usfx writer used out of order."""


class UsfxWriter:
    """
    Streaming usfx document writer.

    Elements are started by name and attributes are added afterwards, so
    the start tag is held back until something else is written. An
    element that is ended with nothing written inside of it is written
    as an empty element.

    """

    def __init__(self, output: Any) -> None:
        self.output = output
        self._xmlfile: Any = None
        self._xf: Any = None
        self._root: Any = None
        self._stack: list[Any] = []
        self._pending: tuple[str, dict[str, str]] | None = None

    def __enter__(self) -> "UsfxWriter":
        self.open()
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()

    @property
    def isopen(self) -> bool:
        """Return True while the document is open."""
        return self._xf is not None

    @property
    def depth(self) -> int:
        """Number of elements open below the usfx root."""
        return len(self._stack) + (1 if self._pending is not None else 0)

    def open(self) -> None:
        """Start the usfx document."""
        if self.isopen:
            raise UsfxWriterError("usfx document is already open")
        xmlfile = et.xmlfile(self.output, encoding="utf-8")
        xf = xmlfile.__enter__()
        try:
            xf.write_declaration()
            self._root = xf.element(
                "usfx",
                {f"{{{XSINS}}}noNamespaceSchemaLocation": USFXSCHEMALOC},
                nsmap={"xsi": XSINS},
            )
            self._root.__enter__()
        except BaseException as err:
            xmlfile.__exit__(type(err), err, err.__traceback__)
            raise
        self._xmlfile = xmlfile
        self._xf = xf

    def close(self) -> None:
        """Close all open elements and finish the usfx document."""
        if not self.isopen:
            return
        xmlfile = self._xmlfile
        try:
            self.closeto(0)
            self._root.__exit__(None, None, None)
        except BaseException as err:
            xmlfile.__exit__(type(err), err, err.__traceback__)
            raise
        else:
            xmlfile.__exit__(None, None, None)
        finally:
            self._xf = self._xmlfile = self._root = None
            self._stack = []
            self._pending = None

    def _flush(self) -> None:
        """Write a start tag that is still waiting for attributes."""
        if self._pending is None:
            return
        name, attrib = self._pending
        self._pending = None
        element = self._xf.element(name, attrib)
        element.__enter__()
        self._stack.append(element)

    def _check(self) -> None:
        if not self.isopen:
            raise UsfxWriterError("usfx document is not open")

    def start_element(self, name: str) -> None:
        self._check()
        self._flush()
        self._pending = (name, {})

    def attribute(self, name: str, value: str) -> None:
        if self._pending is None:
            raise UsfxWriterError(f"attribute {name} written outside of a start tag")
        self._pending[1][name] = value

    def text(self, value: str) -> None:
        self._check()
        self._flush()
        self._xf.write(value)

    def element_with_text(self, name: str, value: str) -> None:
        self._check()
        self._flush()
        element = et.Element(name)
        element.text = value
        self._xf.write(element)

    def end_element(self) -> None:
        self._check()
        if self._pending is not None:
            name, attrib = self._pending
            self._pending = None
            self._xf.write(et.Element(name, attrib))
        elif self._stack:
            self._stack.pop().__exit__(None, None, None)
        else:
            raise UsfxWriterError("no open element to end")

    def closeto(self, depth: int) -> int:
        """End elements until only depth elements are open. Return the number ended."""
        count = 0
        while self.depth > depth:
            self.end_element()
            count += 1
        return count


# -------------------------------------------------------------------------- #
# REFERENCES


def loc2tgt(loc: str) -> str:
    """
    Convert a usx ref loc attribute to a usfx ref tgt attribute.

    "PSA 2:7" becomes "PSA.2.7". Verse part letters are removed. An empty
    string is returned for open ranges, which can't be resolved.

    """
    tgt = loc.replace(" ", ".").replace(":", ".").replace("a", "").replace("b", "")
    if ".-" in tgt or tgt.endswith("-"):
        return ""
    return tgt


def validtgt(tgt: str) -> bool:
    """Return True if a reference target is complete enough to write."""
    return len(tgt) > MINREFLEN


# -------------------------------------------------------------------------- #
# BOOKKEEPING


class BookGuard:
    """Book codes already converted during a run."""

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def seen(self, code: str) -> bool:
        return code in self._seen

    def mark(self, code: str) -> None:
        self._seen.add(code)


class CharNesting:
    """
    Character style nesting depth.

    Depth is counted separately inside and outside of footnotes. Which
    counter is used depends only on the innote flag when the char tag is
    seen. The flag is set when a footnote opens and is only cleared when
    a footnote closes a malformed empty char, so char elements after a
    well formed footnote keep counting as footnote chars.

    """

    def __init__(self) -> None:
        self.body = 0
        self.note = 0
        self.innote = False

    def push(self) -> None:
        if self.innote:
            self.note += 1
        else:
            self.body += 1

    def pop(self) -> bool:
        """Decrease depth. Return False if either counter is now negative."""
        if self.innote:
            self.note -= 1
        else:
            self.body -= 1
        return self.body >= 0 and self.note >= 0


def splitstyle(style: str) -> tuple[str, str]:
    """Split a para style into its base style and level number."""
    if style and style[-1].isdigit():
        return style[:-1], style[-1]
    return style, ""


# -------------------------------------------------------------------------- #
# CONVERSION


class BookTranscoder:
    """
    Convert the events of one usx file into usfx.

    Each start handler returns the number of usfx elements it left open,
    which are closed again when the usx element ends. A handler returns
    None when it has already consumed the end of its element.

    """

    def __init__(self, xw: UsfxWriter, books: BookGuard, fname: str = "") -> None:
        self.xw = xw
        self.books = books
        self.fname = fname
        self.book = self.chapter = self.verse = "0"
        self.nesting = CharNesting()
        self.badnotechar = False
        self.reftgt = ""
        self.skipped = False
        self.usx: UsxReader | None = None
        self._basedepth = xw.depth
        self._closes: list[int] = []
        self._starts = {
            UsxTag.USX: self._usx,
            UsxTag.BOOK: self._book,
            UsxTag.CHAPTER: self._chapter,
            UsxTag.VERSE: self._verse,
            UsxTag.NOTE: self._note,
            UsxTag.CHAR: self._char,
            UsxTag.TABLE: self._table,
            UsxTag.ROW: self._styled,
            UsxTag.CELL: self._styled,
            UsxTag.PARA: self._para,
            UsxTag.FIGURE: self._figure,
            UsxTag.OPTBREAK: self._optbreak,
            UsxTag.REF: self._ref,
        }
        self._paras = {
            ParaStyle.HEADING: self._heading,
            ParaStyle.TOC: self._toc,
            ParaStyle.RESTORE: self._restore,
        }
        self._paras.update({_: self._bodypara for _ in BODYSTYLES})

    @property
    def location(self) -> str:
        return f"{self.book} {self.chapter}:{self.verse}"

    def transcode(self, usx: UsxReader) -> bool:
        """Convert a usx file. Return False if the book was skipped as a duplicate."""
        self.usx = usx
        while not self.skipped:
            event = usx.read()
            if event is None:
                break
            if event.kind == START:
                self._start(event)
            elif event.kind == END:
                self._end(event.name, self._closes.pop())
            else:
                self.xw.text(event.value)
        if self.skipped:
            return False
        self._endbook()
        return True

    # ---------------------------------------------------------------------- #

    def _start(self, event: UsxEvent) -> None:
        try:
            tag = UsxTag(event.name)
        except ValueError:
            LOG.error("Unrecognized USX element name: %s in %s", event.name, self.fname)
            opened: int | None = 0
        else:
            opened = self._starts[tag](event)
        if opened is None:
            return
        if event.empty:
            self._end(event.name, opened, empty=True)
        else:
            self._closes.append(opened)

    def _end(self, name: str, opened: int, empty: bool = False) -> None:
        if name == UsxTag.REF.value:
            if validtgt(self.reftgt):
                self._close(name)
            return
        if name == UsxTag.USX.value:
            self._endbook()
            return
        if name == UsxTag.CHAR.value and not empty:
            if not self.nesting.pop():
                LOG.error(
                    "Unexpected char nesting value: %d normal %d in notes at %s in %s",
                    self.nesting.body,
                    self.nesting.note,
                    self.location,
                    self.fname,
                )
        if name == UsxTag.NOTE.value:
            if self.badnotechar:
                # close the character style started with a milestone
                self._close("char")
                self.badnotechar = False
                self.nesting.innote = False
        for _ in range(opened):
            self._close(name)

    def _close(self, name: str) -> None:
        if self.xw.depth <= self._basedepth:
            LOG.error(
                "Unbalanced close of %s element at %s in %s", name, self.location, self.fname
            )
            return
        self.xw.end_element()

    def _endbook(self) -> None:
        """Close the book and anything that was left open inside of it."""
        extra = self.xw.depth - self._basedepth - 1
        if extra > 0:
            LOG.warning(
                "Closing %d unclosed element(s) at end of %s in %s",
                extra,
                self.book,
                self.fname,
            )
        self.xw.closeto(self._basedepth)

    # ---------------------------------------------------------------------- #
    # element handlers

    def _usx(self, event: UsxEvent) -> int:  # pylint: disable=unused-argument
        # each book is closed when the usx root ends
        return 0

    def _book(self, event: UsxEvent) -> int | None:
        code = event.attrib.get("code", "")
        if self.books.seen(code):
            LOG.info("Skipping duplicate book %s in %s", code, self.fname)
            self.skipped = True
            return None
        if code not in KNOWNBOOKS:
            LOG.warning("Unknown book code %s in %s", code, self.fname)
        self.books.mark(code)
        LOG.info("... Processing %s ...", code)
        self.xw.start_element("book")
        self.xw.attribute("id", code)
        self.xw.start_element("id")
        self.xw.attribute("id", code)
        self.book = code
        self.chapter = self.verse = "0"
        return 1

    def _chapter(self, event: UsxEvent) -> int:
        if "eid" in event.attrib and "number" not in event.attrib:
            return 0
        number = event.attrib.get("number", "")
        self.xw.start_element(event.attrib.get("style", ""))
        self.xw.attribute("id", number)
        self.chapter = number
        self.verse = "0"
        return 1

    def _verse(self, event: UsxEvent) -> int:
        if "eid" in event.attrib and "number" not in event.attrib:
            return 0
        # comma or dash can separate verse ranges in usx
        number = event.attrib.get("number", "").replace(",", "-")
        self.xw.start_element(event.attrib.get("style", ""))
        self.xw.attribute("id", number)
        self.verse = number
        return 1

    def _note(self, event: UsxEvent) -> int:
        style = event.attrib.get("style", "")
        self.xw.start_element(style)
        self.xw.attribute("caller", event.attrib.get("caller", ""))
        self.xw.attribute("sfm", style)
        self.badnotechar = False
        self.nesting.innote = True
        return 1

    def _char(self, event: UsxEvent) -> int:
        self.xw.start_element(event.attrib.get("style", ""))
        if not event.empty:
            self.nesting.push()
        # paratext writes an unclosed char as a milestone that wraps the
        # rest of the note. the lxml target gives the same events for
        # <char/> and <char></char>, so an explicit empty pair is handled
        # as the milestone form too.
        if event.attrib.get("closed") == "false" and event.empty:
            self.badnotechar = True
            LOG.error("Empty unclosed char element at %s in %s", self.location, self.fname)
            return 0
        return 1

    def _table(self, event: UsxEvent) -> int:  # pylint: disable=unused-argument
        self.xw.start_element("table")
        return 1

    def _styled(self, event: UsxEvent) -> int:
        self.xw.start_element(event.attrib.get("style", ""))
        return 1

    def _optbreak(self, event: UsxEvent) -> int:  # pylint: disable=unused-argument
        self.xw.start_element("optionalLineBreak")
        return 1

    def _ref(self, event: UsxEvent) -> int:
        self.reftgt = loc2tgt(event.attrib.get("loc", ""))
        if validtgt(self.reftgt):
            self.xw.start_element("ref")
            self.xw.attribute("tgt", self.reftgt)
        # closed by _end, which checks the pending target again
        return 0

    def _figure(self, event: UsxEvent) -> int:
        attrib = event.attrib
        self.xw.start_element(attrib.get("style", ""))
        for attr, name in FIGUREPARTS:
            self.xw.element_with_text(name, attrib.get(attr, ""))
        if not event.empty and self.usx is not None:
            nxt = self.usx.peek()
            if nxt is not None and nxt.kind == TEXT:
                self.usx.read()
                self.xw.element_with_text("caption", nxt.value)
            elif nxt is not None and nxt.kind == END:
                if nxt.name != UsxTag.FIGURE.value:
                    LOG.error("Unexpected tag after figure: %s in %s", nxt.name, self.fname)
            else:
                LOG.error(
                    "Unexpected node reading caption of figure at %s in %s",
                    self.location,
                    self.fname,
                )
        return 1

    def _para(self, event: UsxEvent) -> int | None:
        sfm, level = splitstyle(event.attrib.get("style", ""))
        try:
            style = ParaStyle(sfm)
        except ValueError:
            return self._otherpara(event, sfm, level)
        return self._paras[style](event, sfm, level)

    # ---------------------------------------------------------------------- #
    # para style handlers
    # pylint: disable=unused-argument

    def _heading(self, event: UsxEvent, sfm: str, level: str) -> int:
        self.xw.start_element("h")
        return 1

    def _toc(self, event: UsxEvent, sfm: str, level: str) -> int:
        self.xw.start_element("toc")
        self.xw.attribute("level", level or "1")
        return 1

    def _bodypara(self, event: UsxEvent, sfm: str, level: str) -> int:
        self.xw.start_element(sfm)
        if level:
            self.xw.attribute("level", level)
        return 1

    def _restore(self, event: UsxEvent, sfm: str, level: str) -> None:
        # editorial comment, not usfm. dropped with everything inside of it.
        if not event.empty and self.usx is not None:
            self.usx.skipelement()

    def _otherpara(self, event: UsxEvent, sfm: str, level: str) -> int:
        self.xw.start_element("p")
        self.xw.attribute("sfm", sfm)
        if level:
            self.xw.attribute("level", level)
        return 1


# -------------------------------------------------------------------------- #


class ConversionRun:
    """
    A single conversion of usx files into one usfx document.

    The usfx document is opened when the run starts and closed when it
    ends, even if a file fails part way through.

    """

    def __init__(self, usfxfile: Any) -> None:
        self.xw = UsfxWriter(usfxfile)
        self.books = BookGuard()
        self.converted: list[str] = []
        self.skipped: list[str] = []
        self.failed: list[str] = []

    def __enter__(self) -> "ConversionRun":
        self.xw.open()
        return self

    def __exit__(self, *_: Any) -> None:
        self.xw.close()

    def convertfile(self, fname: str) -> bool:
        """Append one usx file to the usfx document. Return False on failure."""
        basedepth = self.xw.depth
        transcoder = BookTranscoder(self.xw, self.books, fname)
        try:
            with UsxReader(fname) as usx:
                done = transcoder.transcode(usx)
        except (et.LxmlError, OSError, ValueError) as err:
            LOG.error("Error reading %s", fname)
            LOG.error("    %s", err)
            self.xw.closeto(basedepth)
            self.failed.append(fname)
            return False
        if done:
            self.converted.append(fname)
        else:
            self.skipped.append(fname)
        return True


def findusxfiles(usxdir: str) -> list[str]:
    """Return usx files in usxdir followed by those one directory below it."""
    files: list[str] = []
    subdirs: list[str] = []
    for name in sorted(os.listdir(usxdir)):
        fullname = os.path.join(usxdir, name)
        if os.path.isdir(fullname):
            subdirs.append(fullname)
        elif os.path.isfile(fullname) and name.lower().endswith(USXEXT):
            files.append(fullname)
    for subdir in subdirs:
        files.extend(
            os.path.join(subdir, _)
            for _ in sorted(os.listdir(subdir))
            if _.lower().endswith(USXEXT) and os.path.isfile(os.path.join(subdir, _))
        )
    for fname in files:
        LOG.debug("Found %s", fname)
    return files


def convert(usxdir: str, usfxfile: Any) -> bool:
    """Convert all usx files in usxdir to a single usfx file."""
    if not os.path.isdir(usxdir):
        LOG.error("*** usx directory %s not found. ***", usxdir)
        return False
    try:
        with ConversionRun(usfxfile) as run:
            for fname in findusxfiles(usxdir):
                run.convertfile(fname)
    except (et.LxmlError, OSError) as err:
        LOG.error("Error converting USX files in %s to %s", usxdir, usfxfile)
        LOG.error("    %s", err)
        return False
    LOG.info(
        "Converted %d, skipped %d, failed %d file(s).",
        len(run.converted),
        len(run.skipped),
        len(run.failed),
    )
    return True


def validate_usfx(usfxfile: str, schemafile: str) -> bool:
    """Validate a usfx file against an xml schema."""
    LOG.info("Validating usfx xml...")
    try:
        schema = et.XMLSchema(et.parse(schemafile))
        doc = et.parse(usfxfile)
    except (et.LxmlError, OSError) as err:
        LOG.error("Validation failed: %s", str(err))
        return False
    if schema.validate(doc):
        LOG.warning("Validation passed!")
        return True
    for err in schema.error_log:
        LOG.error("Validation failed: %s", str(err))
    return False


# -------------------------------------------------------------------------- #


if __name__ == "__main__":
    PARSER = ArgumentParser(
        formatter_class=ArgumentDefaultsHelpFormatter,
        description="""
            convert USX bibles to USFX.
        """,
        epilog=f"""
            * Version: {META["VERSION"]} * {META["DATE"]} * This script is public domain. *
        """,
    )
    PARSER.add_argument("usxdir", help="directory containing usx files")
    PARSER.add_argument("-d", help="debug mode", action="store_true")
    PARSER.add_argument(
        "-o", help="specify output file", metavar="output_file", default="usfx.xml"
    )
    PARSER.add_argument("-v", help="verbose output", action="store_true")
    PARSER.add_argument(
        "-x",
        help="validate usfx output against this xml schema",
        metavar="schema",
        default=None,
    )
    ARGS = PARSER.parse_args()

    if ARGS.v:
        LOG.setLevel(logging.INFO)
    if ARGS.d:
        LOG.setLevel(logging.DEBUG)
    if not convert(ARGS.usxdir, ARGS.o):
        sysexit(1)
    if ARGS.x is not None:
        validate_usfx(ARGS.o, ARGS.x)
