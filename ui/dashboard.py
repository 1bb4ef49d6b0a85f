"""AuthApp Terminal Client - login, signup and home screens"""

from typing import Optional

from rich import box
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich.text import Text

from authapp.app import AuthApp
from authapp.auth.forms import LoginForm, SignupForm
from authapp.auth.service import AuthenticationService
from authapp.models.user import User


class AuthDashboard:
    """Terminal front end for an AuthenticationService"""

    def __init__(self, service: AuthenticationService, console: Optional[Console] = None):
        self.service = service
        self.console = console or Console()
        self.running = True

    def show(self) -> None:
        """Render the screen matching the session state and handle one choice"""
        self.console.clear()
        self.console.print(
            Panel(
                Align.center(Text("AuthApp", style="bold white")),
                style="bold blue",
                box=box.DOUBLE,
            )
        )
        self.console.print()
        user = self.service.current_user
        if user is not None:
            self.show_home(user)
        else:
            self.show_welcome()

    def show_welcome(self) -> None:
        menu_text = """
[bold cyan]Welcome![/bold cyan]

[1] Log in
[2] Create an account
[Q] Quit
"""
        self.console.print(Panel(menu_text, title="Menu", border_style="cyan"))
        choice = Prompt.ask("Select option", choices=["1", "2", "q", "Q"], default="1", console=self.console)
        if choice == "1":
            self.login_screen()
        elif choice == "2":
            self.signup_screen()
        else:
            self.quit()

    def login_screen(self) -> None:
        self.console.print(Panel("Log in to your account", title="Login", border_style="green"))
        form = LoginForm(
            email=Prompt.ask("Email", console=self.console),
            password=Prompt.ask("Password", password=True, console=self.console),
        )
        form.submit(self.service)
        self._report(form.error_message, "Logged in")

    def signup_screen(self) -> None:
        self.console.print(Panel("Create a new account", title="Sign up", border_style="green"))
        form = SignupForm(
            name=Prompt.ask("Full name", console=self.console),
            email=Prompt.ask("Email", console=self.console),
            password=Prompt.ask("Password (min 6 characters)", password=True, console=self.console),
            confirm_password=Prompt.ask("Confirm password", password=True, console=self.console),
        )
        form.submit(self.service)
        self._report(form.error_message, "Account created")

    def show_home(self, user: User) -> None:
        table = Table(title="Signed in", box=box.ROUNDED, show_header=False)
        table.add_column("Field", style="cyan", width=15)
        table.add_column("Value", style="green")
        table.add_row("Name", user.name)
        table.add_row("Email", user.email)
        table.add_row("Member since", user.created_at.strftime("%Y-%m-%d"))
        self.console.print(table)
        self.console.print()

        choice = Prompt.ask("[L]og out or [Q]uit", choices=["l", "L", "q", "Q"], default="q", console=self.console)
        if choice.lower() == "l":
            if Confirm.ask("Are you sure you want to sign out?", default=False, console=self.console):
                self.service.logout()
                self.console.print("[yellow]Logged out[/yellow]")
                self.pause()
        else:
            self.quit()

    def quit(self) -> None:
        self.console.print("[yellow]Goodbye![/yellow]")
        self.running = False

    def pause(self) -> None:
        """Hold the last message on screen until the next redraw"""
        self.console.input("\nPress Enter to continue...")

    def _report(self, error_message: str, success_text: str) -> None:
        if error_message:
            self.console.print(f"[bold red]✗ {error_message}[/bold red]")
        else:
            self.console.print(f"[bold green]✓ {success_text}[/bold green]")
        self.pause()


def main(service: Optional[AuthenticationService] = None) -> None:
    """Main entry point for the terminal client"""
    console = Console()
    if service is None:
        service = AuthApp().initialize(log_to_console=False)
    dashboard = AuthDashboard(service, console=console)

    try:
        while dashboard.running:
            dashboard.show()
    except KeyboardInterrupt:
        console.print("\n[yellow]Exiting...[/yellow]")


if __name__ == "__main__":
    main()
