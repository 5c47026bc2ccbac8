"""
Apartment Management System - tkinter front end.
Login -> main window with Apartments / Parking / Accounts (admin only) tabs.
Every button goes through HubController; the windows only render results.
"""

import logging
import tkinter as tk
from datetime import date
from tkinter import messagebox, simpledialog, ttk

from .config import Settings, get_settings
from .controller import HubController, Outcome
from .models import Role
from .session import Session

logger = logging.getLogger(__name__)

BAR_COLOR = "#0f3b3a"


# ------------------------- GUI: Login ------------------------- #

class LoginFrame(tk.Frame):
    def __init__(self, master, app, *args, **kwargs):
        super().__init__(master, *args, **kwargs)
        self.app = app
        self.configure(padx=30, pady=30)

        title_frame = tk.Frame(self)
        title_frame.place(relx=0.5, rely=0.25, anchor="center")
        tk.Label(
            title_frame,
            text=app.settings.window_title,
            font=("Arial", 22, "bold")
        ).pack(pady=(0, 15))

        content = tk.Frame(self)
        content.place(relx=0.5, rely=0.55, anchor="center")

        form = tk.Frame(content)
        form.pack()

        tk.Label(form, text="Username:").grid(row=0, column=0, sticky="w", pady=5, padx=5)
        self.username_entry = tk.Entry(form, width=25)
        self.username_entry.grid(row=0, column=1, pady=5, padx=5)

        tk.Label(form, text="Password:").grid(row=1, column=0, sticky="w", pady=5, padx=5)
        self.password_entry = tk.Entry(form, width=25, show="*")
        self.password_entry.grid(row=1, column=1, pady=5, padx=5)
        self.password_entry.bind("<Return>", lambda e: self.do_login())

        tk.Button(content, text="Login", width=18, command=self.do_login).pack(pady=20)
        self.username_entry.focus_set()

    def do_login(self):
        outcome = self.app.controller.login(self.username_entry.get(), self.password_entry.get())
        if not outcome.ok:
            messagebox.showerror("Login Failed", outcome.message)
            self.password_entry.delete(0, tk.END)
            return
        session = outcome.value
        messagebox.showinfo("Success", f"Login Successful! Role: {session.role.value}")
        self.app.show_main(session)


# ------------------------- GUI: Main window ------------------------- #

class MainFrame(tk.Frame):
    def __init__(self, master, app, session: Session, *args, **kwargs):
        super().__init__(master, *args, **kwargs)
        self.app = app
        self.session = session
        self.controller = app.controller

        style = ttk.Style(self)
        style.theme_use("clam")
        style.configure(
            "Logout.TButton",
            padding=(18, 6),
            relief="solid",
            borderwidth=1,
            font=("Arial", 11, "bold"),
            background="white",
        )
        style.map("Logout.TButton", background=[("active", "#f2f2f2"), ("pressed", "#e5e5e5")])

        # ---------------- Top bar ---------------- #
        top_bar = tk.Frame(self, bg=BAR_COLOR, height=55)
        top_bar.pack(fill="x")
        top_bar.pack_propagate(False)

        role_text = "Admin Console" if session.is_admin else "Tenant Portal"
        tk.Label(top_bar, text=role_text, fg="white", bg=BAR_COLOR,
                 font=("Arial", 16, "bold")).pack(side="left", padx=10)
        ttk.Button(top_bar, text="Log Out", style="Logout.TButton",
                   command=self.confirm_logout).pack(side="right", padx=10, pady=8)
        tk.Label(top_bar, text=f"{session.username} • {session.role.value}", fg="white",
                 bg=BAR_COLOR, font=("Arial", 14)).pack(side="right", padx=10)

        # ---------------- Tabs ---------------- #
        notebook = ttk.Notebook(self)
        notebook.pack(fill="both", expand=True, padx=10, pady=10)

        notebook.add(ApartmentTab(notebook, self.controller, session), text="Apartments")
        notebook.add(ParkingTab(notebook, self.controller, session), text="Parking")
        if session.is_admin:
            notebook.add(AccountTab(notebook, self.controller, session), text="Accounts")

    def confirm_logout(self):
        """Ask save / discard / cancel, then hand the answer to the controller."""
        answer = messagebox.askyesnocancel(
            "Log Out Confirmation", "Do you want to save changes before logging out?"
        )
        if answer is None:
            return False
        outcome = self.controller.logout(self.session, answer)
        if not outcome.ok:
            messagebox.showerror("Save Error", outcome.message)
            return False
        if answer:
            messagebox.showinfo("Log Out", outcome.message)
        self.app.show_login()
        return True


class RecordTab(tk.Frame):
    """Form on top, table in the middle, status line at the bottom."""

    form_title = ""
    columns = ()

    def __init__(self, master, controller: HubController, session: Session):
        super().__init__(master)
        self.controller = controller
        self.session = session

        self.form = tk.LabelFrame(self, text=self.form_title, padx=10, pady=10)
        self.form.pack(fill="x", padx=10, pady=(10, 5))
        self.buttons = tk.Frame(self)
        self.buttons.pack(fill="x", padx=10, pady=5)

        self.tree = ttk.Treeview(self, columns=[c[0] for c in self.columns], show="headings", height=10)
        for name, heading, width in self.columns:
            self.tree.heading(name, text=heading)
            self.tree.column(name, width=width, anchor="center")
        self.tree.pack(fill="both", expand=True, padx=10, pady=5)
        self.tree.bind("<<TreeviewSelect>>", lambda e: self.load_selected())

        self.message_label = tk.Label(self, text="", anchor="w", fg="#333333")
        self.message_label.pack(fill="x", padx=10, pady=(0, 10))

    def add_button(self, text, command, width=12):
        tk.Button(self.buttons, text=text, width=width, command=command).pack(side="left", padx=3)

    def selected_key(self):
        sel = self.tree.selection()
        if not sel:
            return None
        # Rows are inserted with the record key as their item id
        return sel[0]

    def show(self, outcome: Outcome, error_title="Error") -> bool:
        """Put the outcome in the status line; failures also get a dialog."""
        self.message_label.config(text=outcome.message)
        if not outcome.ok:
            messagebox.showerror(error_title, outcome.message)
            return False
        self.clear_fields()
        self.refresh()
        return True

    def refresh(self):
        for item in self.tree.get_children():
            self.tree.delete(item)
        for values in self.rows():
            self.tree.insert("", "end", iid=values[0], values=values)


# ------------------------- Apartments tab ------------------------- #

class ApartmentTab(RecordTab):
    form_title = "Apartment Details"
    columns = (
        ("number", "Apt No", 80),
        ("tenant", "Tenant", 180),
        ("rent", "Rent", 100),
        ("status", "Status", 100),
        ("document", "Document", 80),
    )

    def __init__(self, master, controller, session):
        super().__init__(master, controller, session)

        tk.Label(self.form, text="Apartment Number:").grid(row=0, column=0, sticky="e", padx=(0, 10), pady=4)
        self.number_entry = tk.Entry(self.form, width=15)
        self.number_entry.grid(row=0, column=1, sticky="w", pady=4)

        tk.Label(self.form, text="Tenant Name:").grid(row=1, column=0, sticky="e", padx=(0, 10), pady=4)
        self.tenant_entry = tk.Entry(self.form, width=30)
        self.tenant_entry.grid(row=1, column=1, sticky="w", pady=4)

        tk.Label(self.form, text="Rent:").grid(row=2, column=0, sticky="e", padx=(0, 10), pady=4)
        self.rent_entry = tk.Entry(self.form, width=15)
        self.rent_entry.grid(row=2, column=1, sticky="w", pady=4)

        self.occupied_var = tk.BooleanVar(value=False)
        tk.Checkbutton(self.form, text="Occupied", variable=self.occupied_var).grid(
            row=3, column=1, sticky="w", pady=4
        )

        tk.Label(self.form, text="Document Content:").grid(row=0, column=2, sticky="ne", padx=(20, 10), pady=4)
        self.document_text = tk.Text(self.form, height=5, width=40, wrap="word")
        self.document_text.grid(row=0, column=3, rowspan=4, sticky="nsew", pady=4)
        self.form.columnconfigure(3, weight=1)

        if session.is_admin:
            self.add_button("Add", self.add_apartment)
            self.add_button("Update", self.update_apartment)
            self.add_button("Delete", self.delete_apartment)
        else:
            self.add_button("Book Apartment", self.book_apartment, width=15)
        self.add_button("Clear", self.clear_fields)
        self.add_button("Refresh", self.refresh)

        self.refresh()

    def rows(self):
        for apt in self.controller.apartments():
            yield (
                apt.number,
                apt.tenant_name,
                f"{apt.rent:.2f}",
                "Occupied" if apt.occupied else "Available",
                "Yes" if apt.document_content.strip() else "No",
            )

    def clear_fields(self):
        self.number_entry.config(state="normal")
        self.number_entry.delete(0, tk.END)
        self.tenant_entry.delete(0, tk.END)
        self.rent_entry.delete(0, tk.END)
        self.occupied_var.set(False)
        self.document_text.delete("1.0", "end")
        self.tree.selection_remove(self.tree.selection())

    def load_selected(self):
        number = self.selected_key()
        if number is None:
            return
        apt = self.controller.apartment_manager.find_by_key(number)
        if apt is None:
            return
        self.clear_fields()
        self.number_entry.insert(0, apt.number)
        self.number_entry.config(state="readonly")
        self.tenant_entry.insert(0, apt.tenant_name)
        self.rent_entry.insert(0, str(apt.rent))
        self.occupied_var.set(apt.occupied)
        self.document_text.insert("1.0", apt.document_content)
        self.message_label.config(text=apt.describe())

    def _form_values(self):
        return (
            self.number_entry.get(),
            self.tenant_entry.get(),
            self.rent_entry.get(),
            self.occupied_var.get(),
            # Text widgets always end with a newline
            self.document_text.get("1.0", "end-1c"),
        )

    def add_apartment(self):
        self.show(self.controller.add_apartment(self.session, *self._form_values()), "Input Error")

    def update_apartment(self):
        self.show(self.controller.update_apartment(self.session, *self._form_values()), "Input Error")

    def delete_apartment(self):
        number = self.selected_key()
        if number is None:
            messagebox.showwarning("Selection Error", "Please select an apartment to delete.")
            return
        if messagebox.askyesno("Confirm Deletion", f"Delete apartment {number}?"):
            self.show(self.controller.delete_apartment(self.session, number))

    def book_apartment(self):
        number = self.selected_key()
        if number is None:
            messagebox.showwarning("Selection Error", "Please select an available apartment to book.")
            return
        self.show(self.controller.book_apartment(self.session, number), "Booking Error")


# ------------------------- Accounts tab ------------------------- #

class AccountTab(RecordTab):
    form_title = "User Details"
    columns = (
        ("username", "Username", 200),
        ("role", "Role", 120),
    )

    def __init__(self, master, controller, session):
        super().__init__(master, controller, session)

        tk.Label(self.form, text="Username:").grid(row=0, column=0, sticky="e", padx=(0, 10), pady=4)
        self.username_entry = tk.Entry(self.form, width=25)
        self.username_entry.grid(row=0, column=1, sticky="w", pady=4)

        tk.Label(self.form, text="Password:").grid(row=1, column=0, sticky="e", padx=(0, 10), pady=4)
        self.password_entry = tk.Entry(self.form, width=25, show="*")
        self.password_entry.grid(row=1, column=1, sticky="w", pady=4)

        tk.Label(self.form, text="Role:").grid(row=2, column=0, sticky="e", padx=(0, 10), pady=4)
        self.role_var = tk.StringVar(value=Role.REGULAR.value)
        ttk.Combobox(
            self.form,
            textvariable=self.role_var,
            values=[r.value for r in Role],
            state="readonly",
            width=22,
        ).grid(row=2, column=1, sticky="w", pady=4)

        self.add_button("Add User", self.add_account)
        self.add_button("Update User", self.update_account)
        self.add_button("Delete User", self.delete_account)
        self.add_button("Clear", self.clear_fields)
        self.add_button("Refresh", self.refresh)

        self.refresh()

    def rows(self):
        accounts = self.controller.accounts(self.session)
        for account in accounts:
            yield (account.username, account.role.value)

    def refresh(self):
        super().refresh()
        self.message_label.config(
            text=f"User list refreshed. Total users: {len(self.tree.get_children())}"
        )

    def clear_fields(self):
        self.username_entry.config(state="normal")
        self.username_entry.delete(0, tk.END)
        self.password_entry.delete(0, tk.END)
        self.role_var.set(Role.REGULAR.value)
        self.tree.selection_remove(self.tree.selection())

    def load_selected(self):
        username = self.selected_key()
        if username is None:
            return
        account = self.controller.account_manager.find_by_key(username)
        if account is None:
            return
        self.clear_fields()
        self.username_entry.insert(0, account.username)
        # Usernames are fixed once created; passwords are never shown
        self.username_entry.config(state="readonly")
        self.role_var.set(account.role.value)
        self.message_label.config(text=f"Details for user {account.username} loaded.")

    def add_account(self):
        self.show(self.controller.add_account(
            self.session, self.username_entry.get(), self.password_entry.get(), self.role_var.get()
        ), "Input Error")

    def update_account(self):
        self.show(self.controller.update_account(
            self.session, self.username_entry.get(), self.password_entry.get(), self.role_var.get()
        ), "Input Error")

    def delete_account(self):
        username = self.selected_key()
        if username is None:
            messagebox.showwarning("Selection Error", "Please select a user to delete.")
            return
        if messagebox.askyesno("Confirm Deletion", f"Delete user {username}?"):
            self.show(self.controller.delete_account(self.session, username))


# ------------------------- Parking tab ------------------------- #

class ParkingTab(RecordTab):
    form_title = "Parking Spot Details"
    columns = (
        ("spot", "Spot No", 80),
        ("reserved", "Reserved", 80),
        ("reserved_by", "Reserved By", 180),
        ("date", "Reservation Date", 140),
    )

    def __init__(self, master, controller, session):
        super().__init__(master, controller, session)

        tk.Label(self.form, text="Spot Number:").grid(row=0, column=0, sticky="e", padx=(0, 10), pady=4)
        self.spot_entry = tk.Entry(self.form, width=15)
        self.spot_entry.grid(row=0, column=1, sticky="w", pady=4)

        self.reserved_var = tk.BooleanVar(value=False)
        self.reserved_check = tk.Checkbutton(self.form, text="Reserved", variable=self.reserved_var)
        self.reserved_check.grid(row=1, column=1, sticky="w", pady=4)

        tk.Label(self.form, text="Reserved By:").grid(row=2, column=0, sticky="e", padx=(0, 10), pady=4)
        self.reserved_by_entry = tk.Entry(self.form, width=30)
        self.reserved_by_entry.grid(row=2, column=1, sticky="w", pady=4)

        tk.Label(self.form, text="Reservation Date (YYYY-MM-DD):").grid(
            row=3, column=0, sticky="e", padx=(0, 10), pady=4
        )
        self.date_entry = tk.Entry(self.form, width=15)
        self.date_entry.grid(row=3, column=1, sticky="w", pady=4)

        if session.is_admin:
            self.add_button("Add Spot", self.add_spot)
        self.add_button("Reserve Spot", self.reserve_spot)
        self.add_button("Cancel Reservation", self.cancel_reservation, width=17)
        if session.is_admin:
            self.add_button("Delete Spot", self.delete_spot)
        self.add_button("Clear", self.clear_fields)
        self.add_button("Refresh", self.refresh)

        self.clear_fields()
        self.refresh()

    def rows(self):
        for spot in self.controller.spots():
            yield (
                spot.spot_number,
                "Yes" if spot.reserved else "No",
                spot.reserved_by or "N/A",
                spot.reservation_date or "N/A",
            )

    def clear_fields(self):
        self.spot_entry.config(state="normal")
        self.spot_entry.delete(0, tk.END)
        self.reserved_by_entry.config(state="normal")
        self.reserved_by_entry.delete(0, tk.END)
        self.date_entry.delete(0, tk.END)
        self.reserved_var.set(False)
        # Regular tenants always reserve under their own name
        if not self.session.is_admin:
            self.reserved_by_entry.config(state="readonly")
            self.reserved_check.config(state="disabled")
        self.tree.selection_remove(self.tree.selection())

    def load_selected(self):
        spot_number = self.selected_key()
        if spot_number is None:
            return
        spot = self.controller.parking_manager.find_by_key(spot_number)
        if spot is None:
            return
        self.clear_fields()
        self.spot_entry.insert(0, spot.spot_number)
        self.spot_entry.config(state="readonly")
        self.reserved_var.set(spot.reserved)
        self.reserved_by_entry.config(state="normal")
        self.reserved_by_entry.insert(0, spot.reserved_by or "")
        if not self.session.is_admin:
            self.reserved_by_entry.config(state="readonly")
        self.date_entry.insert(0, spot.reservation_date or "")
        self.message_label.config(text=f"Details for spot {spot.spot_number} loaded.")

    def add_spot(self):
        self.show(self.controller.add_spot(
            self.session,
            self.spot_entry.get(),
            self.reserved_var.get(),
            self.reserved_by_entry.get(),
            self.date_entry.get(),
        ), "Input Error")

    def reserve_spot(self):
        spot_number = self.selected_key()
        if spot_number is None:
            messagebox.showwarning("Selection Error", "Please select a parking spot to reserve.")
            return
        reservation_date = simpledialog.askstring(
            "Reserve Spot",
            f"Enter reservation date for spot {spot_number} (YYYY-MM-DD):",
            initialvalue=date.today().isoformat(),
            parent=self,
        )
        if reservation_date is None or not reservation_date.strip():
            self.message_label.config(text="Reservation cancelled by user.")
            return
        tenant = self.reserved_by_entry.get() if self.session.is_admin else None
        self.show(self.controller.reserve_spot(self.session, spot_number, reservation_date, tenant),
                  "Reservation Error")

    def cancel_reservation(self):
        spot_number = self.selected_key()
        if spot_number is None:
            messagebox.showwarning("Selection Error", "Please select a parking spot to cancel its reservation.")
            return
        spot = self.controller.parking_manager.find_by_key(spot_number)
        holder = spot.reserved_by if spot is not None and spot.reserved_by else "N/A"
        if messagebox.askyesno("Confirm Cancellation",
                               f"Cancel reservation for spot {spot_number} (Reserved by: {holder})?"):
            self.show(self.controller.cancel_spot(self.session, spot_number), "Cancellation Error")

    def delete_spot(self):
        spot_number = self.selected_key()
        if spot_number is None:
            messagebox.showwarning("Selection Error", "Please select a parking spot to delete.")
            return
        if messagebox.askyesno("Confirm Deletion", f"Delete parking spot {spot_number}?"):
            self.show(self.controller.delete_spot(self.session, spot_number))


# ------------------------- Main Application ------------------------- #

class ApartmentApp(tk.Tk):
    def __init__(self, settings: Settings = None):
        super().__init__()
        self.settings = settings or get_settings()
        self.title(self.settings.window_title)
        self.geometry("960x600")
        self.controller = HubController.from_settings(self.settings)
        self.current_frame = None
        self.session = None
        self.protocol("WM_DELETE_WINDOW", self.on_close)
        self.show_login()

    def clear_current_frame(self):
        if self.current_frame is not None:
            self.current_frame.destroy()
            self.current_frame = None

    def show_login(self):
        self.session = None
        self.clear_current_frame()
        self.current_frame = LoginFrame(self, app=self)
        self.current_frame.pack(fill="both", expand=True)

    def show_main(self, session: Session):
        self.session = session
        self.clear_current_frame()
        self.current_frame = MainFrame(self, app=self, session=session)
        self.current_frame.pack(fill="both", expand=True)

    def on_close(self):
        # Closing the window while logged in goes through the logout prompt
        if self.session is not None and not self.current_frame.confirm_logout():
            return
        logger.info("Closing application")
        self.destroy()
