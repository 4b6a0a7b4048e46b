from __future__ import annotations

from flask import Flask

from ..common.http import json_errors, ok, parse_body, parse_query
from ..container import Container
from .schemas import SiteCreate, SiteJobRateCreate, SiteListQuery, SiteUpdate


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sites", methods=["GET"], endpoint="sites_list")
    @json_errors("Failed to fetch construction sites")
    def list_sites():
        page = container.site_service.list_sites(parse_query(SiteListQuery))
        return ok([site.to_payload() for site in page.items], page=page)

    @app.route("/api/sites", methods=["POST"], endpoint="sites_create")
    @json_errors("Failed to create construction site")
    def create_site():
        site = container.site_service.create_site(parse_body(SiteCreate))
        return ok(site.to_payload(), message="Construction site created successfully", status=201)

    @app.route("/api/sites/<int:site_id>", methods=["GET"], endpoint="sites_get")
    @json_errors("Failed to fetch construction site")
    def get_site(site_id: int):
        return ok(container.site_service.get_site(site_id).to_payload())

    @app.route("/api/sites/<int:site_id>", methods=["PUT"], endpoint="sites_update")
    @json_errors("Failed to update construction site")
    def update_site(site_id: int):
        site = container.site_service.update_site(site_id, parse_body(SiteUpdate))
        return ok(site.to_payload(), message="Construction site updated successfully")

    @app.route("/api/sites/<int:site_id>", methods=["DELETE"], endpoint="sites_delete")
    @json_errors("Failed to delete construction site")
    def delete_site(site_id: int):
        container.site_service.delete_site(site_id)
        return ok(message="Construction site deleted successfully")

    @app.route("/api/sites/<int:site_id>/job-rates", methods=["GET"], endpoint="site_job_rates_list")
    @json_errors("Failed to fetch site job rates")
    def list_job_rates(site_id: int):
        return ok(list(container.site_service.list_job_rates(site_id)))

    @app.route("/api/sites/<int:site_id>/job-rates", methods=["POST"], endpoint="site_job_rates_create")
    @json_errors("Failed to create site job rate")
    def create_job_rate(site_id: int):
        rate = container.site_service.add_job_rate(site_id, parse_body(SiteJobRateCreate))
        return ok(rate, message="Site job rate created successfully", status=201)
