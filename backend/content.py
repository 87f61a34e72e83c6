"""
Static portfolio content served by the read-only endpoints.
"""

PORTFOLIO = {
    "name": "Annan Shrestha",
    "title": "GIS Specialist & Web Developer",
    "location": "Worcester, MA",
    "email": "annanshrestha1@gmail.com",
    "phone": "+1-781-750-9053",
    "education": {
        "current": "MS in Geographic Information Science - Clark University (2024-2026)",
        "previous": "MS in Environmental Science - Tribhuvan University, Nepal",
    },
    "skills": {
        "frontend": [
            {"name": "HTML5 & CSS3", "level": 90},
            {"name": "JavaScript & ES6+", "level": 85},
            {"name": "React.js", "level": 80},
            {"name": "Web Mapping (Leaflet, MapboxGL)", "level": 88},
            {"name": "Data Visualization (D3.js, Chart.js)", "level": 85},
            {"name": "Bootstrap & Responsive Design", "level": 90},
        ],
        "backend": [
            {"name": "Python Programming", "level": 92},
            {"name": "Node.js & Express", "level": 78},
            {"name": "GIS Software (ArcGIS Pro/Desktop, QGIS)", "level": 95},
            {"name": "Spatial Databases (PostGIS, SpatiaLite)", "level": 82},
            {"name": "Remote Sensing & Image Analysis", "level": 88},
            {"name": "Statistical Analysis (R, SPSS)", "level": 85},
        ],
    },
    "experience": [
        {
            "position": "Research Assistant",
            "company": "Clark's Center for Geospatial Analytics",
            "period": "2025 - Present",
            "responsibilities": [
                "Updated land use for mapping the conversion of coastal habitats to shrimp aquaculture",
                "Developed comprehensive maps reflecting land changes from 1999 to 2024 due to shrimp "
                "farming across Indonesia, Thailand, Vietnam, Myanmar, and Ecuador",
            ],
        },
        {
            "position": "GIS and Remote Sensing Analyst",
            "company": "Environment and Engineering Research Center Pvt. Ltd",
            "period": "2019 - 2024",
            "responsibilities": [
                "Gathered geospatial data from various sources and maintained geodatabase integrity",
                "Provided technical support and training to users of GIS and remote sensing software",
                "Led GIS and remote sensing projects from planning to execution",
                "Created high-quality maps and visual representations of geospatial data",
            ],
        },
    ],
    "projects": [
        {
            "name": "Soil Erosion Mapping",
            "description": "Analyzed soil erosion rate of districts in Bagmati Province using RUSLE Method",
            "technologies": ["GIS Analysis", "RUSLE", "Environmental"],
            "github": "https://github.com/AnnShrestha/Soil_erosion_Bagmati-Province",
        },
        {
            "name": "African Elephant Habitat Modeling",
            "description": "Modeled habitat preferences in Tarangire National Park using GPS collar data",
            "technologies": ["Spatial Analysis", "Wildlife", "GPS Data"],
            "github": "https://github.com/AnnShrestha/Habitat_Suitability",
        },
        {
            "name": "Flood/Overland Flow Modeling",
            "description": "Created flood hazard maps for West Rapti Basin and identified vulnerable communities",
            "technologies": ["Hydrology", "Risk Assessment", "Modeling"],
            "github": "https://github.com/AnnShrestha/Flood_overland_FLow_Modelling",
        },
    ],
}

PUBLICATIONS = [
    {
        "id": 1,
        "title": "Spatial Analysis of Land Use Change and Its Impact on Soil Erosion in Bagmati Province, Nepal",
        "authors": ["A. Shrestha", "B. Sharma", "C. Poudel"],
        "journal": "Journal of Environmental Geography",
        "status": "Under Review",
        "year": 2024,
        "abstract": (
            "This study examines the relationship between land use changes and soil erosion rates "
            "using RUSLE methodology and remote sensing data across multiple districts in Bagmati Province."
        ),
        "keywords": ["land use change", "soil erosion", "RUSLE", "remote sensing", "Nepal"],
    },
    {
        "id": 2,
        "title": "Multi-hazard Risk Assessment Using GIS: A Case Study of Sindhupalchowk District",
        "authors": ["A. Shrestha", "D. Maharjan"],
        "journal": "International Journal of Disaster Risk Reduction",
        "status": "In Preparation",
        "year": 2024,
        "abstract": (
            "Comprehensive analysis of multiple natural hazards including landslides, floods, "
            "and earthquakes using spatial modeling techniques."
        ),
        "keywords": ["multi-hazard", "risk assessment", "GIS", "spatial modeling", "disaster management"],
    },
    {
        "id": 3,
        "title": "Habitat Suitability Modeling for African Elephants Using Remote Sensing and GPS Collar Data",
        "authors": ["A. Shrestha", "J. Smith", "M. Johnson"],
        "journal": "Remote Sensing in Ecology and Conservation",
        "status": "Draft",
        "year": 2024,
        "abstract": (
            "Application of MaxEnt modeling and satellite imagery to predict suitable habitat areas "
            "for African elephants in Tarangire National Park."
        ),
        "keywords": ["habitat modeling", "MaxEnt", "wildlife conservation", "remote sensing", "GPS tracking"],
    },
]

BLOG_POSTS = [
    {
        "id": 1,
        "title": "Getting Started with Web GIS Development",
        "slug": "getting-started-web-gis-development",
        "excerpt": (
            "Learn the fundamentals of building interactive web-based GIS applications "
            "using modern web technologies."
        ),
        "content": "",
        "author": "Annan Shrestha",
        "publishedAt": "2024-03-15T10:00:00Z",
        "tags": ["web-gis", "javascript", "leaflet", "tutorial"],
        "readTime": 8,
    },
    {
        "id": 2,
        "title": "Python for GIS: Advanced Spatial Analysis Techniques",
        "slug": "python-gis-advanced-spatial-analysis",
        "excerpt": (
            "Explore advanced spatial analysis techniques using Python libraries like "
            "GeoPandas, Shapely, and Rasterio."
        ),
        "content": "",
        "author": "Annan Shrestha",
        "publishedAt": "2024-03-10T14:30:00Z",
        "tags": ["python", "gis", "spatial-analysis", "geopandas"],
        "readTime": 12,
    },
]

# lastUpdated is stamped per request.
ANALYTICS = {
    "totalVisitors": 1250,
    "monthlyVisitors": 340,
    "projectViews": 890,
    "contactForms": 45,
    "topPages": [
        {"page": "/projects", "views": 450},
        {"page": "/about", "views": 320},
        {"page": "/skills", "views": 280},
        {"page": "/contact", "views": 200},
    ],
    "referrers": [
        {"source": "GitHub", "visits": 380},
        {"source": "LinkedIn", "visits": 290},
        {"source": "Google", "visits": 250},
        {"source": "Direct", "visits": 330},
    ],
}

SPATIAL_SAMPLES = {
    "points": {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "Clark University", "type": "Educational Institution"},
                "geometry": {"type": "Point", "coordinates": [-71.825, 42.251]},
            }
        ],
    },
    "polygons": {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "Worcester County", "population": 830000},
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [
                        [
                            [-71.9, 42.1],
                            [-71.7, 42.1],
                            [-71.7, 42.4],
                            [-71.9, 42.4],
                            [-71.9, 42.1],
                        ]
                    ],
                },
            }
        ],
    },
}
DEFAULT_SPATIAL_SAMPLE = "points"

# Canned result for /gis/analyze; centroid is Worcester, MA.
ANALYSIS_RESULTS = {
    "area": 1234.56,
    "perimeter": 789.12,
    "centroid": {"x": -71.8023, "y": 42.2619},
    "metadata": {"crs": "EPSG:4326", "units": "degrees"},
}

API_AUTHOR = {
    "name": "Annan Shrestha",
    "email": "annanshrestha1@gmail.com",
    "github": "https://github.com/AnnShrestha",
    "linkedin": "https://linkedin.com/in/annan-shrestha",
}

API_ENDPOINT_LIST = [
    "/health",
    "/portfolio",
    "/contact",
    "/gis/*",
    "/publications",
    "/github/*",
    "/analytics",
    "/blog",
]

# Paths are relative to the API prefix.
API_ENDPOINTS = {
    "health": {
        "method": "GET",
        "path": "/health",
        "description": "Health check and system status",
    },
    "portfolio": {
        "method": "GET",
        "path": "/portfolio",
        "description": "Get complete portfolio data including skills, experience, and projects",
    },
    "contact": {
        "method": "POST",
        "path": "/contact",
        "description": "Send contact form message",
        "body": {
            "name": "string",
            "email": "string",
            "subject": "string",
            "message": "string",
        },
    },
    "gis": {
        "analyze": {
            "method": "POST",
            "path": "/gis/analyze",
            "description": "Perform GIS spatial analysis",
        },
        "data": {
            "method": "GET",
            "path": "/gis/data/{type}",
            "description": "Get spatial data in GeoJSON format",
        },
        "upload": {
            "method": "POST",
            "path": "/upload/gis",
            "description": "Upload GIS files for processing",
        },
    },
    "publications": {
        "method": "GET",
        "path": "/publications",
        "description": "Get list of research publications and papers",
    },
    "github": {
        "repos": {
            "method": "GET",
            "path": "/github/repos",
            "description": "Get latest GitHub repositories",
        }
    },
    "analytics": {
        "method": "GET",
        "path": "/analytics",
        "description": "Get portfolio analytics and visitor statistics",
    },
    "blog": {
        "method": "GET",
        "path": "/blog",
        "description": "Get blog posts and articles",
    },
}

CONTACT_EXAMPLE = {
    "name": "John Doe",
    "email": "john@example.com",
    "subject": "Collaboration Opportunity",
    "message": "I would like to discuss a potential project...",
}
