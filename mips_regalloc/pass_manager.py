"""
Pass Manager Infrastructure

Provides the framework for running the allocation passes in order:
IR -> liveness -> interference graph -> register allocation map.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Any
import json

from .ir import IrCommand, collect_temps


@dataclass
class PassConfig:
    """Configuration for a single pass."""
    name: str
    enabled: bool = True
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class PassMetrics:
    """Metrics collected by a pass during execution."""
    custom: dict[str, Any] = field(default_factory=dict)
    messages: list[str] = field(default_factory=list)


def count_temps(commands: list[IrCommand]) -> int:
    """Count distinct temporaries defined or used in an IR listing."""
    return len(collect_temps(commands))


class CompilerPass(ABC):
    """Base class for all passes in the allocation pipeline."""

    def __init__(self):
        self._metrics: Optional[PassMetrics] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the pass name for config matching."""
        pass

    @property
    @abstractmethod
    def input_type(self) -> str:
        """Return the input type: 'ir', 'liveness', or 'interference'."""
        pass

    @property
    @abstractmethod
    def output_type(self) -> str:
        """Return the output type: 'liveness', 'interference', or 'allocation'."""
        pass

    @abstractmethod
    def run(self, data: Any, config: PassConfig) -> Any:
        """Consume the previous stage's result and produce the next one."""
        pass

    def get_metrics(self) -> Optional[PassMetrics]:
        """Return metrics from the last run, if collected."""
        return self._metrics

    def _init_metrics(self):
        """Initialize metrics for a new run."""
        self._metrics = PassMetrics()

    def _add_metric_message(self, msg: str):
        """Add a diagnostic message to metrics."""
        if self._metrics:
            self._metrics.messages.append(msg)


def _parse_config(data: dict) -> dict[str, PassConfig]:
    configs: dict[str, PassConfig] = {}
    for pass_name, opts in data.get("passes", {}).items():
        configs[pass_name] = PassConfig(
            name=pass_name,
            enabled=opts.get("enabled", True),
            options=dict(opts.get("options", {}))
        )
    return configs


@dataclass
class RegAllocPipeline:
    """
    Runs the allocation passes from an IR listing to a register map.

    Validates type compatibility between adjacent passes.
    """
    passes: list[CompilerPass] = field(default_factory=list)
    config: dict[str, PassConfig] = field(default_factory=dict)
    print_after_all: bool = False
    print_metrics: bool = False

    def add_pass(self, p: CompilerPass) -> None:
        """Register a pass in the pipeline."""
        self.passes.append(p)

    def set_config(self, data: dict) -> None:
        """Load pass configs from an already parsed JSON document."""
        self.config.update(_parse_config(data))

    def load_config(self, config_path: str) -> None:
        """Load pass configs from JSON file."""
        with open(config_path) as f:
            data = json.load(f)
        self.set_config(data)

    def _print_pass_metrics(self, p: CompilerPass, cfg: PassConfig):
        """Print metrics for a pass execution."""
        print(f"\n=== Pass: {p.name} ({p.input_type} → {p.output_type}) ===")
        print(f"Config: {', '.join(f'{k}={v}' for k, v in cfg.options.items()) or '(default)'}")

        metrics = p.get_metrics()
        if metrics:
            if metrics.custom:
                print(f"Custom metrics: {metrics.custom}")
            if metrics.messages:
                print("Diagnostics:")
                for msg in metrics.messages:
                    print(f"  - {msg}")

    def _print_result(self, kind: str, result: Any) -> None:
        from .printing import print_liveness, print_interference, print_allocation

        if kind == "liveness":
            print_liveness(result)
        elif kind == "interference":
            print_interference(result)
        elif kind == "allocation":
            print_allocation(result)

    def run(self, commands: list[IrCommand]) -> Any:
        """
        Run the full allocation pipeline.

        Args:
            commands: The IR instruction list

        Returns:
            Mapping of Temp -> physical register name
        """
        from .printing import print_ir

        if self.print_after_all:
            print("\n" + "=" * 60)
            print("REGISTER ALLOCATION START")
            print("=" * 60)
            print_ir(commands)

        if self.print_metrics:
            print(f"Input: {len(commands)} instructions, "
                  f"{count_temps(commands)} temps")

        state: dict[str, Any] = {"type": "ir", "data": commands}

        for p in self.passes:
            cfg = self.config.get(p.name, PassConfig(name=p.name))

            if not cfg.enabled:
                if self.print_metrics:
                    print(f"\n=== Pass: {p.name} === (SKIPPED - disabled)")
                continue

            if p.input_type != state["type"]:
                raise TypeError(
                    f"Pass '{p.name}' expects input type '{p.input_type}' "
                    f"but current state is '{state['type']}'"
                )

            result = p.run(state["data"], cfg)

            if self.print_metrics:
                self._print_pass_metrics(p, cfg)

            if self.print_after_all:
                print("-" * 60)
                print(f"After {p.name}:")
                print("-" * 60)
                self._print_result(p.output_type, result)

            state = {"type": p.output_type, "data": result}

        if self.print_after_all:
            print("=" * 60)
            print("REGISTER ALLOCATION END")
            print("=" * 60 + "\n")

        if state["type"] != "allocation":
            raise RuntimeError(
                f"Pipeline did not produce an allocation, got '{state['type']}' instead"
            )

        return state["data"]
