"""Turn controller driving the think/action/observe/output protocol."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..commands import CommandError, RunContext, create_run_context
from ..constants import DEFAULT_MAX_STEPS
from ..llm import (
    ActionStep, BackendError, LLMClient, ObserveStep, OutputStep,
    ProtocolViolation, ThinkStep, format_observation, parse_step
)
from ..llm.payload import Message
from ..utils.logging import logger
from .tools import ToolRegistry


class LoopState(Enum):
    """Where the turn controller currently is."""
    THINKING = "thinking"
    ACTING_PENDING = "acting_pending"
    OBSERVING = "observing"
    DONE = "done"
    ABORTED = "aborted"


class RunStatus(Enum):
    """How a run ended."""
    COMPLETED = "completed"
    PARSE_ERROR = "parse_error"
    UNKNOWN_TOOL = "unknown_tool"
    MAX_STEPS = "max_steps"
    BACKEND_ERROR = "backend_error"


@dataclass
class RunOutcome:
    """Final answer or labelled abort reason of one run."""
    status: RunStatus
    content: str
    steps: int
    messages: List[Message] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status == RunStatus.COMPLETED


class ConversationHistory:
    """Append-only transcript; the system instruction is always first."""

    def __init__(self, system_prompt: str):
        self._messages: List[Message] = [{"role": "system", "content": system_prompt}]

    def add_user(self, content: str) -> None:
        self._messages.append({"role": "user", "content": content})

    def add_assistant(self, content: str) -> None:
        self._messages.append({"role": "assistant", "content": content})

    @property
    def messages(self) -> List[Message]:
        return [dict(message) for message in self._messages]

    def __len__(self) -> int:
        return len(self._messages)


class AgentLoop:
    """Requests one step per turn and reacts to it until output or a hard stop.

    Tool failures are fed back to the model as observations. Unparseable
    replies, unknown tools, backend failures and the step cap end the run.
    """

    def __init__(self, llm_client: LLMClient, tools: ToolRegistry, system_prompt: str,
                 max_steps: int = DEFAULT_MAX_STEPS):
        """Initialize the agent loop.

        Args:
            llm_client: Backend returning one raw step per call
            tools: Tools available to action steps
            system_prompt: Instruction placed first in every history
            max_steps: Hard cap on model turns per run
        """
        if max_steps <= 0:
            raise ValueError("max_steps must be positive")
        self.llm_client = llm_client
        self.tools = tools
        self.system_prompt = system_prompt
        self.max_steps = max_steps
        self.state = LoopState.THINKING

    def run(self, query: str, context: Optional[RunContext] = None) -> RunOutcome:
        """Run the protocol for one user query.

        Args:
            query: User request
            context: Run state for command tools (defaults to the process cwd)

        Returns:
            RunOutcome with the final answer or the abort reason
        """
        context = context or create_run_context()
        history = ConversationHistory(self.system_prompt)
        history.add_user(query)
        logger.user(query)

        self.state = LoopState.THINKING
        step_count = 0

        while step_count < self.max_steps:
            try:
                reply = self.llm_client.send_request(history.messages)
            except BackendError as e:
                return self._abort(RunStatus.BACKEND_ERROR, str(e), step_count, history)

            history.add_assistant(reply)

            try:
                step = parse_step(reply)
            except ProtocolViolation as e:
                logger.error(f"Raw response: {reply}")
                return self._abort(RunStatus.PARSE_ERROR, str(e), step_count, history)

            step_count += 1

            if isinstance(step, ThinkStep):
                self.state = LoopState.THINKING
                logger.step("think", step.content)
            elif isinstance(step, ObserveStep):
                self.state = LoopState.OBSERVING
                logger.step("observe", step.content)
            elif isinstance(step, ActionStep):
                if step.tool not in self.tools:
                    return self._abort(RunStatus.UNKNOWN_TOOL, f"Unknown tool: {step.tool}",
                                       step_count, history)
                self.state = LoopState.ACTING_PENDING
                observation = self._invoke_tool(step, context)
                history.add_assistant(format_observation(observation))
                self.state = LoopState.OBSERVING
            elif isinstance(step, OutputStep):
                self.state = LoopState.DONE
                logger.step("output", step.content)
                return RunOutcome(RunStatus.COMPLETED, step.content, step_count, history.messages)
            else:
                raise AssertionError(f"Unhandled step type: {type(step).__name__}")

        message = f"Maximum steps ({self.max_steps}) reached. Stopping execution."
        logger.warning(message)
        return self._abort(RunStatus.MAX_STEPS, message, step_count, history)

    def _invoke_tool(self, step: ActionStep, context: RunContext) -> str:
        """Run a tool; failures become observation text instead of exceptions."""
        logger.step("action", f'{step.tool}("{step.input}")')
        try:
            result = self.tools.invoke(step.tool, step.input, context)
        except CommandError as e:
            logger.error(f"Tool execution failed: {e}")
            return f"Error: {e}"
        logger.step("action", f'Tool {step.tool}("{step.input}") executed successfully')
        return result

    def _abort(self, status: RunStatus, reason: str, steps: int,
               history: ConversationHistory) -> RunOutcome:
        self.state = LoopState.ABORTED
        if status != RunStatus.MAX_STEPS:
            logger.error(reason)
        return RunOutcome(status, reason, steps, history.messages)
