"""
Project operations. Moneybird has no single-project lookup here, so `get_project`
scans the full collection.
"""

from typing import Any, Dict, Union

from ..services.moneybird import MoneybirdClient
from .models import ListProjectsOptions, ListResult, ProjectData
from .pagination import as_list, coerce_options, find_by_id, paginate, payload


def get_project(client: MoneybirdClient, project_id: str) -> Dict[str, Any]:
    return find_by_id(as_list(client.get_projects(), "projects"), project_id, "Project")


def list_projects(
    client: MoneybirdClient,
    options: Union[ListProjectsOptions, Dict[str, Any], None] = None,
) -> ListResult:
    options = coerce_options(ListProjectsOptions, options)
    projects = as_list(client.get_projects(), "projects")

    if options.state and options.state != "all":
        projects = [project for project in projects if project.get("state") == options.state]

    return paginate(projects, options.page, options.per_page)


def create_project(client: MoneybirdClient, data: Union[ProjectData, Dict[str, Any]]) -> Dict[str, Any]:
    return client.request("post", "projects", {"project": payload(ProjectData, data)})


def update_project(client: MoneybirdClient, project_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    return client.request("put", f"projects/{project_id}", {"project": data})


def archive_project(client: MoneybirdClient, project_id: str) -> Dict[str, Any]:
    return update_project(client, project_id, {"state": "archived"})
