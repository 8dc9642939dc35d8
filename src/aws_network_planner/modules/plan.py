"""Network plan display"""

from rich.table import Table
from rich.text import Text

from ..core import BaseDisplay
from ..models import NetworkPlan


class PlanDisplay(BaseDisplay):
    def show(self, plan: NetworkPlan):
        allocation = plan.allocation
        mode = "HA (one per public subnet)" if plan.nat.high_availability else "single"
        self.panel(
            f"🗺  Network plan: {plan.name}",
            [
                ("Region", plan.region or "-"),
                ("Base CIDR", allocation.base),
                ("Subnet size", f"/{allocation.prefixlen}"),
                ("AZs", ", ".join(plan.azs)),
                (
                    "Subnets",
                    f"{allocation.public_count} public, "
                    f"{allocation.private_count} private "
                    f"({2**allocation.new_bits - len(allocation)} spare)",
                ),
                ("NAT", f"{mode}, {len(plan.nat.gateways)} gateway(s)"),
            ],
        )
        self.show_subnets(plan)
        self.show_gateways(plan)
        self.show_route_tables(plan)

    def show_subnets(self, plan: NetworkPlan):
        table = Table(title="Subnets", show_header=True, header_style="bold")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Name", style="green")
        table.add_column("CIDR", style="cyan")
        table.add_column("AZ", style="yellow")
        table.add_column("Role")
        table.add_column("Egress", style="white")

        for subnet in plan.subnets:
            tags = plan.subnet_tags.get(subnet.index, {})
            if subnet.public:
                role = Text("public", style="green")
                egress = "igw"
            else:
                role = Text("private", style="magenta")
                egress = plan.nat.routes.get(subnet.index, "-")
            table.add_row(
                str(subnet.index),
                tags.get("Name", "-"),
                subnet.cidr,
                subnet.az,
                role,
                egress,
            )
        self.console.print(table)

    def show_gateways(self, plan: NetworkPlan):
        if not plan.nat.gateways:
            self.console.print("[yellow]No NAT gateways planned[/]")
            return

        table = Table(title="NAT Gateways", show_header=True, header_style="bold")
        table.add_column("ID", style="cyan")
        table.add_column("Name", style="green")
        table.add_column("Public Subnet", justify="right")
        table.add_column("AZ", style="yellow")
        table.add_column("Private Subnets", style="white")

        for gw in plan.nat.gateways:
            served = [str(i) for i, target in plan.nat.routes.items() if target == gw.id]
            table.add_row(
                gw.id,
                plan.gateway_tags.get(gw.id, {}).get("Name", "-"),
                str(gw.subnet_index),
                gw.az,
                ", ".join(served) or "[dim]none[/]",
            )
        self.console.print(table)

    def show_route_tables(self, plan: NetworkPlan):
        if not plan.route_tables:
            return

        table = Table(title="Route Tables", show_header=True, header_style="bold")
        table.add_column("Name", style="green")
        table.add_column("Routes", style="cyan")
        table.add_column("Subnets", style="white")

        for rt in plan.route_tables:
            routes = ", ".join(f"{r.destination} → {r.target}" for r in rt.routes)
            table.add_row(
                rt.name, routes, ", ".join(str(i) for i in rt.subnet_indexes)
            )
        self.console.print(table)
