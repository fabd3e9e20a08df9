"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def pool_exhausted(position: int) -> Diagnostic:
        """Strict replay source read past the end of its buffer.

        Args:
            position: Offset of the read that failed

        Returns:
            Diagnostic for POOL_EXHAUSTED
        """
        msg = f"Pool exhausted at byte {position}"
        return Diagnostic(
            code=DiagnosticCode.POOL_EXHAUSTED,
            message=msg,
            hint="Use a non-strict replay to zero-fill past the end of the pool",
        )

    @staticmethod
    def skip_item(reason: str) -> Diagnostic:
        """Generic skip raised by user code or filter_map().

        Args:
            reason: Why the value was skipped

        Returns:
            Diagnostic for SKIP_ITEM
        """
        msg = f"Skipped item: {reason}"
        return Diagnostic(code=DiagnosticCode.SKIP_ITEM, message=msg)

    @staticmethod
    def filter_rejected() -> Diagnostic:
        """filter() predicate returned False.

        Returns:
            Diagnostic for FILTER_REJECTED
        """
        return Diagnostic(
            code=DiagnosticCode.FILTER_REJECTED,
            message="Filter predicate rejected the generated value",
            hint="Generate values closer to the accepted shape instead of filtering",
        )

    @staticmethod
    def empty_choice() -> Diagnostic:
        """choice() called with no items.

        Returns:
            Diagnostic for EMPTY_CHOICE
        """
        return Diagnostic(
            code=DiagnosticCode.EMPTY_CHOICE,
            message="Cannot choose from an empty sequence of items",
            hint="Pass at least one item to choice()",
        )

    @staticmethod
    def depth_exceeded(max_depth: int) -> Diagnostic:
        """Structural draws nested deeper than the configured limit.

        Args:
            max_depth: The depth limit that was exceeded

        Returns:
            Diagnostic for DEPTH_EXCEEDED
        """
        msg = f"Maximum draw nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.DEPTH_EXCEEDED,
            message=msg,
            hint="Make recursive generators pick a terminal case for zero bytes",
        )

    @staticmethod
    def predicate_failed(
        argument: str,
        check_result: str,
        pool: str,
        seed: int | None,
    ) -> Diagnostic:
        """Predicate returned a failing result.

        Args:
            argument: repr() of the minimal failing argument
            check_result: repr() of the predicate's return value
            pool: Hex dump of the minimal pool
            seed: Seed of the failing trial

        Returns:
            Diagnostic for PREDICATE_FAILED
        """
        msg = f"Predicate failed for argument {argument}"
        return Diagnostic(
            code=DiagnosticCode.PREDICATE_FAILED,
            message=msg,
            hint="The argument above is the smallest failing input found",
            argument=argument,
            check_result=check_result,
            pool=pool,
            seed=seed,
        )

    @staticmethod
    def predicate_raised(
        argument: str,
        raised: str,
        pool: str,
        seed: int | None,
    ) -> Diagnostic:
        """Predicate raised an exception.

        Args:
            argument: repr() of the minimal failing argument
            raised: "ExceptionType: message" of the exception
            pool: Hex dump of the minimal pool
            seed: Seed of the failing trial

        Returns:
            Diagnostic for PREDICATE_RAISED
        """
        msg = f"Predicate failed for argument {argument}; raised {raised}"
        return Diagnostic(
            code=DiagnosticCode.PREDICATE_RAISED,
            message=msg,
            hint="The argument above is the smallest input that raises",
            argument=argument,
            raised=raised,
            pool=pool,
            seed=seed,
        )

    @staticmethod
    def skip_budget_exhausted(tests_run: int, num_tests: int, skipped: int) -> Diagnostic:
        """Too many skipped draws to finish the run.

        Args:
            tests_run: Trials completed
            num_tests: Trials requested
            skipped: Draws skipped

        Returns:
            Diagnostic for SKIP_BUDGET_EXHAUSTED
        """
        msg = (
            f"Could not complete {tests_run}/{num_tests} tests "
            f"(have skipped {skipped} times)"
        )
        return Diagnostic(
            code=DiagnosticCode.SKIP_BUDGET_EXHAUSTED,
            message=msg,
            hint="Loosen filters or raise CheckConfig.max_skips",
        )

    @staticmethod
    def unsupported_check_result(type_name: str) -> Diagnostic:
        """Predicate returned a value that is not a check result.

        Args:
            type_name: Type of the returned value

        Returns:
            Diagnostic for UNSUPPORTED_CHECK_RESULT
        """
        msg = f"Predicate returned unsupported type '{type_name}'"
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_CHECK_RESULT,
            message=msg,
            hint="Return a bool, None, Ok(...) or Err(...) from the predicate",
        )
