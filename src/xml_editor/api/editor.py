"""Operation API for the XML editor.

:class:`XMLEditor` bundles the configured components and exposes them both as
typed methods and through :meth:`XMLEditor.run`, which dispatches on an
operation name and always returns an :class:`OperationResult`.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from xml_editor.codec import BPECodec, CodecError, from_hex_string
from xml_editor.formatting import XMLFormatter, XMLMinifier
from xml_editor.shared import (
    DiagnosticSeverity,
    EditorConfig,
    OperationResult,
    ResultKind,
    get_logger,
)
from xml_editor.social import (
    GraphRenderError,
    SocialNetwork,
    SocialNetworkError,
    build_graph,
    export_dot,
    most_active,
    most_influencer,
    mutual_followers,
    network_from_tree,
    render_graph,
    render_topic_search,
    render_user,
    render_users,
    render_word_search,
    search_posts_by_topic,
    search_posts_by_word,
    suggest_users,
)
from xml_editor.tokenization import FixResult, VerificationReport, XMLFixer, XMLVerifier
from xml_editor.tools import OperationProfiler
from xml_editor.tree import JSONEmitter, XMLTreeBuilder

PayloadType = Union[str, bytes, bytearray]
Handler = Callable[..., Union[str, bytes]]

# Failures reported as unsuccessful results instead of propagating
OPERATION_ERRORS = (
    CodecError,
    SocialNetworkError,
    GraphRenderError,
    UnicodeDecodeError,
    ValueError,
    TypeError,
    OSError,
)


class UnknownOperationError(ValueError):
    """Raised by :meth:`XMLEditor.run` for unregistered operation names."""


class XMLEditor:
    """Configured entry point for every editor operation.

    Attributes:
        config: Aggregate editor configuration
        correlation_id: Correlation ID attached to logs and results
        profiler: Collects timing for each operation run

    Examples:
        Direct methods:
        >>> editor = XMLEditor()
        >>> editor.fix("<a><b></a>").text
        '<a><b></b></a>'

        Named operations:
        >>> result = editor.run("compress", "aaaa")
        >>> result.is_binary, result.data[8:]
        (True, b'aa\\x80\\x80')
    """

    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or EditorConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "xml_editor")
        self.profiler = OperationProfiler(
            enable_memory_tracking=self.config.global_.enable_profiling,
            correlation_id=correlation_id,
        )

        self._verifier = XMLVerifier(self.config.verifier, correlation_id)
        self._fixer = XMLFixer(correlation_id)
        self._formatter = XMLFormatter(self.config.formatter, correlation_id)
        self._minifier = XMLMinifier(self.config.minifier, correlation_id)
        self._tree_builder = XMLTreeBuilder(correlation_id)
        self._json_emitter = JSONEmitter(self.config.json_output, correlation_id)
        self._codec = BPECodec(self.config.codec, correlation_id)

        self._operations: Dict[str, Tuple[Handler, ResultKind]] = {
            "verify": (self._run_verify, ResultKind.TEXT),
            "fix": (self._run_fix, ResultKind.TEXT),
            "fixation": (self._run_fix, ResultKind.TEXT),
            "format": (self._run_format, ResultKind.TEXT),
            "json": (self._run_json, ResultKind.TEXT),
            "mini": (self._run_minify, ResultKind.TEXT),
            "compress": (self._run_compress, ResultKind.BINARY),
            "decompress": (self._run_decompress, ResultKind.TEXT),
            "most_active": (self._run_most_active, ResultKind.TEXT),
            "most_influencer": (self._run_most_influencer, ResultKind.TEXT),
            "mutual": (self._run_mutual, ResultKind.TEXT),
            "suggest": (self._run_suggest, ResultKind.TEXT),
            "search": (self._run_search, ResultKind.TEXT),
            "draw": (self._run_draw, ResultKind.TEXT),
        }

    @property
    def operations(self) -> List[str]:
        """Names accepted by :meth:`run`."""
        return sorted(self._operations)

    # Typed operations

    def verify(self, text: str) -> VerificationReport:
        return self._verifier.verify(text)

    def fix(self, text: str) -> FixResult:
        return self._fixer.fix(text)

    def format(self, text: str) -> str:
        return self._formatter.format(text)

    def minify(self, text: str) -> str:
        return self._minifier.minify(text)

    def to_json(self, text: str) -> str:
        return self._json_emitter.emit(self._tree_builder.build(text))

    def compress(self, data: PayloadType) -> bytes:
        if isinstance(data, str):
            data = data.encode("utf-8")
        return self._codec.compress(data)

    def decompress(self, artifact: bytes) -> bytes:
        return self._codec.decompress(artifact)

    def network(self, text: str) -> SocialNetwork:
        return network_from_tree(self._tree_builder.build(text), self.correlation_id)

    # Named dispatch

    def run(self, operation: str, payload: PayloadType, **options: Any) -> OperationResult:
        """Run a named operation and wrap its outcome.

        Args:
            operation: One of :attr:`operations`
            payload: Input text or bytes (decompress also accepts hex text)
            **options: Operation-specific options such as ``fix``, ``ids``,
                ``user_id``, ``word``, ``topic`` or ``output_path``

        Returns:
            OperationResult; failures carry ``error`` and a ``None`` payload

        Raises:
            UnknownOperationError: If ``operation`` is not registered
        """
        if operation not in self._operations:
            raise UnknownOperationError(
                f"Unknown operation '{operation}'. Available: {', '.join(self.operations)}"
            )
        handler, kind = self._operations[operation]
        result = OperationResult(
            operation=operation,
            kind=kind,
            correlation_id=self.correlation_id,
        )

        with self.profiler.profile(operation, input_size=len(payload)) as profile:
            try:
                result.payload = handler(payload, result, **options)
            except OPERATION_ERRORS as e:
                result.error = str(e)
                result.add_diagnostic(
                    DiagnosticSeverity.ERROR,
                    f"Operation failed: {e}",
                    "xml_editor",
                    error_type=type(e).__name__,
                )
                self.logger.error(
                    "Operation failed",
                    extra={"operation": operation, "error_type": type(e).__name__, "error": str(e)},
                )
            else:
                profile.output_size = len(result.payload)

        result.performance = profile.to_metrics()
        self.logger.info(
            "Operation complete",
            extra={
                "operation": operation,
                "success": result.success,
                "processing_time_ms": result.performance.processing_time_ms,
            },
        )
        return result

    # Handlers

    @staticmethod
    def _as_text(payload: PayloadType) -> str:
        if isinstance(payload, (bytes, bytearray)):
            return bytes(payload).decode("utf-8")
        return payload

    def _run_verify(self, payload: PayloadType, result: OperationResult, fix: bool = False) -> str:
        text = self._as_text(payload)
        report = self.verify(text)
        result.summary = report.render()
        for error in report.errors:
            result.add_diagnostic(
                DiagnosticSeverity.WARNING,
                error.describe(),
                "verifier",
                kind=error.kind.name,
                line=error.line,
            )
        if fix and not report.is_valid:
            return self._run_fix(text, result)
        return text

    def _run_fix(self, payload: PayloadType, result: OperationResult) -> str:
        fixed = self.fix(self._as_text(payload))
        for repair in fixed.repairs:
            result.add_diagnostic(
                DiagnosticSeverity.INFO,
                repair.description,
                "fixer",
                kind=repair.kind.name,
                line=repair.line,
            )
        return fixed.text

    def _run_format(self, payload: PayloadType, result: OperationResult) -> str:
        return self.format(self._as_text(payload))

    def _run_json(self, payload: PayloadType, result: OperationResult) -> str:
        return self.to_json(self._as_text(payload))

    def _run_minify(self, payload: PayloadType, result: OperationResult) -> str:
        return self.minify(self._as_text(payload))

    def _run_compress(self, payload: PayloadType, result: OperationResult) -> bytes:
        outcome = self._codec.encode(
            payload.encode("utf-8") if isinstance(payload, str) else payload
        )
        result.summary = (
            f"Compressed {outcome.stats.original_size} bytes to "
            f"{outcome.stats.compressed_size} bytes "
            f"({outcome.stats.dictionary_size} dictionary entries)"
        )
        return outcome.artifact

    def _run_decompress(
        self, payload: PayloadType, result: OperationResult
    ) -> Union[str, bytes]:
        artifact = from_hex_string(payload) if isinstance(payload, str) else payload
        restored = self.decompress(artifact)
        try:
            return restored.decode("utf-8")
        except UnicodeDecodeError:
            # Non-text input was compressed; hand the bytes back unchanged
            result.kind = ResultKind.BINARY
            result.add_diagnostic(
                DiagnosticSeverity.INFO,
                "Decompressed data is not UTF-8 text; returning raw bytes",
                "codec",
                size=len(restored),
            )
            return restored

    def _run_most_active(self, payload: PayloadType, result: OperationResult) -> str:
        return render_user("Most active user", most_active(self.network(self._as_text(payload))))

    def _run_most_influencer(self, payload: PayloadType, result: OperationResult) -> str:
        user = most_influencer(self.network(self._as_text(payload)))
        return render_user("Most influencer user", user)

    def _run_mutual(
        self,
        payload: PayloadType,
        result: OperationResult,
        ids: Sequence[str] = ()
    ) -> str:
        ids = [str(user_id).strip() for user_id in ids if str(user_id).strip()]
        users = mutual_followers(self.network(self._as_text(payload)), ids)
        return render_users(f"Mutual followers of {', '.join(ids)}", users)

    def _run_suggest(
        self,
        payload: PayloadType,
        result: OperationResult,
        user_id: Optional[str] = None
    ) -> str:
        if user_id is None:
            raise ValueError("suggest requires a user_id")
        users = suggest_users(self.network(self._as_text(payload)), str(user_id).strip())
        return render_users(f"Suggested users for {user_id}", users)

    def _run_search(
        self,
        payload: PayloadType,
        result: OperationResult,
        word: Optional[str] = None,
        topic: Optional[str] = None
    ) -> str:
        if (word is None) == (topic is None):
            raise ValueError("search requires exactly one of word or topic")
        network = self.network(self._as_text(payload))
        if word is not None:
            return render_word_search(search_posts_by_word(network, word), word)
        return render_topic_search(search_posts_by_topic(network, topic), topic)

    def _run_draw(
        self,
        payload: PayloadType,
        result: OperationResult,
        output_path: Optional[Union[str, Path]] = None
    ) -> str:
        graph = build_graph(self.network(self._as_text(payload)))
        if not graph:
            raise ValueError("No users found to draw")
        dot_text = export_dot(graph, self.config.graph)
        if output_path is not None:
            image = render_graph(dot_text, output_path, self.config.graph, self.correlation_id)
            result.summary = f"Graph image written to {image}"
        return dot_text
