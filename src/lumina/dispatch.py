"""Top-level dispatch: presentation file → flat list of slides.

+----------------------------+--------------------------------------------+
| Head symbol                | Result                                     |
+============================+============================================+
| ``slide``                  | one slide built from the form              |
+----------------------------+--------------------------------------------+
| ``song``                   | one slide per sequenced lyric text         |
+----------------------------+--------------------------------------------+
| ``load``                   | the slides of every form in the named file,|
|                            | inlined in place                           |
+----------------------------+--------------------------------------------+
| ``image``, ``video``,      | one text-less slide showing the media      |
| ``presentation``           |                                            |
+----------------------------+--------------------------------------------+
| anything else              | UnrecognizedFormError                      |
+----------------------------+--------------------------------------------+

Usage::

    from lumina.dispatch import parse_file
    result = parse_file(Path("sunday.lisp"))
    for error in result.errors:
        print(error)
    show(result.slides)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .background import expand_home
from .config import Settings
from .context import ParseContext
from .exceptions import CyclicIncludeError, IncludeError, LuminaError, UnrecognizedFormError
from .fs import FileSystem, LocalFileSystem
from .lisp.forms import find_keyword_value_or_default
from .lisp.reader import read_all
from .lisp.values import Value, head_name, value_to_str
from .lisp.vocabulary import MEDIA_HEADS, Head, MediaKeyword
from .models import Slide
from .slides import lisp_to_slide, media_to_slide
from .songs import lisp_to_song, song_slides

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """Slides that parsed, in document order, and the errors of forms that didn't."""

    slides: list[Slide] = field(default_factory=list)
    errors: list[LuminaError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def parse_lisp(form: Value, context: ParseContext | None = None) -> list[Slide]:
    """Slides for one top-level form.

    Raises:
        UnrecognizedFormError: the form is not a list headed by a known symbol.
        LuminaError: any failure building this form's slides.  For ``load``
            forms only reading the target is fatal; failing forms inside it
            are recorded on ``context.errors`` and skipped.
    """
    context = context or ParseContext()
    head = Head.lookup(head_name(form))

    if head is Head.SLIDE:
        return [lisp_to_slide(form, context)]
    if head is Head.SONG:
        return song_slides(lisp_to_song(form, context), context.settings)
    if head is Head.LOAD:
        return _load(form, context)
    if head in MEDIA_HEADS:
        return [media_to_slide(form, context)]

    raise UnrecognizedFormError(head_name(form) or value_to_str(form))


def _load_target(form: tuple, context: ParseContext) -> Path:
    target = find_keyword_value_or_default(form, MediaKeyword.SOURCE.value)
    if target is None and len(form) > 1 and isinstance(form[1], str):
        target = form[1]
    if not isinstance(target, str):
        raise IncludeError(value_to_str(form), "no file named")
    path = Path(expand_home(target, context.settings.home_dir))
    if not path.is_absolute():
        path = context.base_dir / path
    return path.resolve()


def _load(form: tuple, context: ParseContext) -> list[Slide]:
    path = _load_target(form, context)
    if path in context.include_chain:
        raise CyclicIncludeError(path)

    try:
        source = context.fs.read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise IncludeError(path, str(exc)) from exc

    logger.debug("Loading %s", path)
    return _parse_forms(read_all(source), context.including(path))


def _parse_forms(forms: list[Value], context: ParseContext) -> list[Slide]:
    slides: list[Slide] = []
    for form in forms:
        try:
            slides.extend(parse_lisp(form, context))
        except LuminaError as exc:
            logger.error("Skipping form in %s: %s", context.base_dir, exc)
            context.errors.append(exc)
    return slides


def parse_document(
    source: str,
    *,
    base_dir: Path | None = None,
    settings: Settings | None = None,
    fs: FileSystem | None = None,
    include_chain: tuple[Path, ...] = (),
) -> ParseResult:
    """Parse every form in *source*, keeping going past forms that fail.

    Relative paths (backgrounds and ``load`` targets) are taken relative to
    *base_dir*, the current directory by default.

    Raises:
        LispSyntaxError: *source* itself is not well-formed.
    """
    context = ParseContext(include_chain=include_chain)
    if base_dir is not None:
        context.base_dir = base_dir
    if settings is not None:
        context.settings = settings
    if fs is not None:
        context.fs = fs

    slides = _parse_forms(read_all(source), context)
    return ParseResult(slides=slides, errors=context.errors)


def parse_file(
    path: Path, *, settings: Settings | None = None, fs: FileSystem | None = None
) -> ParseResult:
    """Read and parse the presentation file at *path*.

    Raises:
        IncludeError: the file cannot be read or is not UTF-8 text.
        LispSyntaxError: the file is not well-formed.
    """
    path = Path(path).expanduser().resolve()
    reader = fs or LocalFileSystem()
    try:
        source = reader.read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise IncludeError(path, str(exc)) from exc
    return parse_document(
        source, base_dir=path.parent, settings=settings, fs=reader, include_chain=(path,)
    )
