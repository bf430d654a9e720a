"""
Rich-based user prompts
"""
from typing import Optional
from rich.console import Console
from rich.prompt import Prompt
from rich.panel import Panel

from ...core.interfaces import CANCELLED, PromptProvider, PromptResult
from ...core.logging import get_stdout_console


class RichPromptProvider(PromptProvider):
    """
    Terminal prompt provider.

    Ctrl-C or end of input while a prompt is open is reported as
    CANCELLED instead of unwinding through the SSH transport.
    """
    
    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_stdout_console()
    
    def show_message(self, message: str) -> None:
        """Display server messages such as login banners"""
        self.console.print(Panel(message.rstrip(), border_style="blue"))
    
    def request_text(self, prompt: str) -> PromptResult:
        return self._ask(prompt, password=False)
    
    def request_secret(self, prompt: str) -> PromptResult:
        return self._ask(prompt, password=True)
    
    def _ask(self, prompt: str, password: bool) -> PromptResult:
        # Servers usually end prompts with ': ', rich adds its own
        label = prompt.rstrip().rstrip(":")
        try:
            return Prompt.ask(label, password=password, console=self.console)
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return CANCELLED
